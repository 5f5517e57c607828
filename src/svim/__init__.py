# svim/__init__.py
"""svim: a small terminal text editor."""

__version__ = "0.1.0"
