"""Headless editor surface keeping documents and decorations in memory."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from highlight_engine.spans import (
    ColorStyle,
    ColorTag,
    Position,
    SpanValidationError,
    TextRange,
    ensure_position,
    ensure_range,
)

from .protocol import SelectionEvent, SurfaceEditError


@dataclass(slots=True)
class MemoryDocument:
    """List-of-lines document; ``version`` bumps on every edit."""

    key: str
    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False
    saved_versions: List[int] = field(default_factory=list)
    closed: bool = False

    @classmethod
    def from_text(cls, key: str, text: str) -> "MemoryDocument":
        return cls(key=key, _lines=text.split("\n"))

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_text(self, index: int) -> str:
        return self._lines[index]

    def offset_at(self, position: Position) -> int:
        ensure_position(self, position)
        offset = sum(len(line) + 1 for line in self._lines[: position.line])
        return offset + position.column

    def replace(self, text_range: TextRange, text: str) -> None:
        if self.closed:
            raise SurfaceEditError("Document is closed", document_key=self.key)
        try:
            ensure_range(self, text_range)
        except SpanValidationError as exc:
            raise SurfaceEditError(str(exc), document_key=self.key) from exc
        current = self.text
        start = self.offset_at(text_range.start)
        end = self.offset_at(text_range.end)
        self._lines = (current[:start] + text + current[end:]).split("\n")
        self.version += 1
        self.dirty = True


class MemoryEditor:
    def __init__(self, document: MemoryDocument) -> None:
        self._document = document
        self.decorations: Dict[object, tuple[TextRange, ...]] = {}

    @property
    def document(self) -> MemoryDocument:
        return self._document

    def set_decorations(self, style: object, ranges: Sequence[TextRange]) -> None:
        self.decorations[style] = tuple(ranges)

    def painted(self) -> Dict[object, tuple[TextRange, ...]]:
        return {style: ranges for style, ranges in self.decorations.items() if ranges}

    def insert_text(self, position: Position, text: str) -> None:
        self._document.replace(TextRange(position, position), text)

    def delete_range(self, text_range: TextRange) -> None:
        self._document.replace(text_range, "")

    def save(self) -> None:
        self._document.saved_versions.append(self._document.version)
        self._document.dirty = False

    def select(self, *ranges: TextRange) -> SelectionEvent:
        return SelectionEvent(editor=self, selections=tuple(ranges))


@dataclass(frozen=True, slots=True)
class StyleHandle:
    color: ColorTag
    style: ColorStyle
    serial: int


class MemorySurface:
    """Implements ``EditorSurface`` for tests and headless hosts.

    Pick-list prompts are answered from ``pick_answers`` in order; an empty
    queue behaves like the user dismissing the prompt.
    """

    def __init__(self) -> None:
        self.editors: List[MemoryEditor] = []
        self.active: Optional[MemoryEditor] = None
        self.messages: List[str] = []
        self.prompts: List[tuple[tuple[str, ...], str]] = []
        self.pick_answers: List[Optional[str]] = []
        self.styles: Dict[ColorTag, StyleHandle] = {}
        self.disposed: List[StyleHandle] = []
        self._serial = 0

    def open(self, key: str, text: str, *, activate: bool = True) -> MemoryEditor:
        editor = MemoryEditor(MemoryDocument.from_text(key, text))
        self.editors.append(editor)
        if activate:
            self.active = editor
        return editor

    @property
    def active_editor(self) -> Optional[MemoryEditor]:
        return self.active

    @property
    def visible_editors(self) -> Sequence[MemoryEditor]:
        return tuple(self.editors)

    def register_style(self, color: ColorTag, style: ColorStyle) -> StyleHandle:
        self._serial += 1
        handle = StyleHandle(color=color, style=style, serial=self._serial)
        self.styles[color] = handle
        return handle

    def dispose_style(self, handle: object) -> None:
        if isinstance(handle, StyleHandle):
            self.styles.pop(handle.color, None)
            self.disposed.append(handle)

    def show_message(self, text: str) -> None:
        self.messages.append(text)

    def show_pick_list(
        self,
        labels: Sequence[str],
        *,
        placeholder: str,
        on_pick: Callable[[Optional[str]], None],
    ) -> None:
        self.prompts.append((tuple(labels), placeholder))
        answer = self.pick_answers.pop(0) if self.pick_answers else None
        on_pick(answer)


__all__ = ["MemoryDocument", "MemoryEditor", "MemorySurface", "StyleHandle"]
