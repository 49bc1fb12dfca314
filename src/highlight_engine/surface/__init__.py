"""Host editor boundary: protocols, rendering and an in-memory host."""

from .memory import MemoryDocument, MemoryEditor, MemorySurface
from .protocol import (
    EditorSurface,
    EditorView,
    SelectionEvent,
    SurfaceEditError,
    TextDocument,
    is_blank,
)
from .render import RenderAdapter, StyleRegistry

__all__ = [
    "TextDocument",
    "EditorView",
    "EditorSurface",
    "SelectionEvent",
    "SurfaceEditError",
    "is_blank",
    "RenderAdapter",
    "StyleRegistry",
    "MemoryDocument",
    "MemoryEditor",
    "MemorySurface",
]
