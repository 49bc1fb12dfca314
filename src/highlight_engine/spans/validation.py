"""Bounds checks for positions and ranges coming from a host document."""

from __future__ import annotations

from typing import Protocol

from .position import Position, TextRange


class LineSource(Protocol):
    @property
    def line_count(self) -> int: ...

    def line_text(self, index: int) -> str: ...


class SpanValidationError(ValueError):
    """Raised when a host reports a position outside its own document."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position


def ensure_position(document: LineSource, position: Position) -> Position:
    if position.line >= document.line_count:
        raise SpanValidationError("Line out of range", position=position)
    if position.column > len(document.line_text(position.line)):
        raise SpanValidationError("Column out of range", position=position)
    return position


def ensure_range(document: LineSource, text_range: TextRange) -> TextRange:
    ensure_position(document, text_range.start)
    ensure_position(document, text_range.end)
    return text_range
