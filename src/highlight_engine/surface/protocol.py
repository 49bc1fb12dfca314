"""Boundary types describing what the engine needs from a host editor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence

from highlight_engine.spans import ColorStyle, ColorTag, Position, TextRange


class TextDocument(Protocol):
    """Read side of a host document."""

    @property
    def key(self) -> str:
        """Stable identity of the document (URI, path, buffer id)."""
        ...

    @property
    def line_count(self) -> int: ...

    def line_text(self, index: int) -> str: ...


class EditorView(Protocol):
    """A visible editor showing one document."""

    @property
    def document(self) -> TextDocument: ...

    def set_decorations(self, style: object, ranges: Sequence[TextRange]) -> None:
        """Replace every range painted with ``style`` in this editor."""
        ...

    def insert_text(self, position: Position, text: str) -> None: ...

    def delete_range(self, text_range: TextRange) -> None: ...

    def save(self) -> None: ...


class EditorSurface(Protocol):
    """Window-level services: editors, paint styles, messages and prompts."""

    @property
    def active_editor(self) -> Optional[EditorView]: ...

    @property
    def visible_editors(self) -> Sequence[EditorView]: ...

    def register_style(self, color: ColorTag, style: ColorStyle) -> object:
        """Create a reusable paint style and return its handle."""
        ...

    def dispose_style(self, handle: object) -> None: ...

    def show_message(self, text: str) -> None: ...

    def show_pick_list(
        self,
        labels: Sequence[str],
        *,
        placeholder: str,
        on_pick: Callable[[Optional[str]], None],
    ) -> None:
        """Ask the user to pick one label; ``on_pick(None)`` when dismissed."""
        ...


@dataclass(frozen=True, slots=True)
class SelectionEvent:
    """Selections reported by one editor in a single change notification."""

    editor: EditorView
    selections: tuple[TextRange, ...]

    @property
    def non_empty(self) -> tuple[TextRange, ...]:
        return tuple(sel for sel in self.selections if not sel.is_empty)


class SurfaceEditError(RuntimeError):
    """Raised by hosts when a document edit cannot be applied."""

    def __init__(self, message: str, *, document_key: str | None = None) -> None:
        super().__init__(message)
        self.document_key = document_key


def is_blank(document: TextDocument, index: int) -> bool:
    return not document.line_text(index).strip()


__all__ = [
    "TextDocument",
    "EditorView",
    "EditorSurface",
    "SelectionEvent",
    "SurfaceEditError",
    "is_blank",
]
