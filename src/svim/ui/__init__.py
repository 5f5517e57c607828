# svim/ui/__init__.py
