# svim/utils/__init__.py
