# src/svim/core/__init__.py
"""Public facade for svim.core: re-export main classes from CamelCase modules.

Keeps the one-class-per-module file names (Document.py, Editor.py, ...),
but provides flat imports for convenience and stability.
"""

from .Document import Document, DocumentError, OpenError, SaveError  # noqa: F401
from .Editor import Editor, EditorMode, StatusMessage  # noqa: F401
from .Keys import Key, KeyKind  # noqa: F401
from .Row import Row  # noqa: F401
from .Viewport import Position, Size, move_cursor, scroll  # noqa: F401


__all__ = [
    "Document",
    "DocumentError",
    "OpenError",
    "SaveError",
    "Editor",
    "EditorMode",
    "StatusMessage",
    "Key",
    "KeyKind",
    "Row",
    "Position",
    "Size",
    "move_cursor",
    "scroll",
]
