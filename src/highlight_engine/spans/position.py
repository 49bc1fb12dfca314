"""Positions and half-open text ranges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based ``(line, column)`` location, ordered lexicographically."""

    line: int
    column: int

    def __post_init__(self) -> None:
        if self.line < 0 or self.column < 0:
            raise ValueError(f"Position must be non-negative, got {self.as_tuple()}")

    @classmethod
    def of(cls, location: "Position | tuple[int, int]") -> "Position":
        if isinstance(location, Position):
            return location
        line, column = location
        return cls(int(line), int(column))

    def as_tuple(self) -> tuple[int, int]:
        return (self.line, self.column)

    def __str__(self) -> str:
        return f"{self.line},{self.column}"


@dataclass(frozen=True, slots=True)
class TextRange:
    """Half-open range ``[start, end)`` between two positions."""

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"Range end {self.end} precedes start {self.start}")

    @classmethod
    def between(
        cls,
        anchor: Position | tuple[int, int],
        active: Position | tuple[int, int],
    ) -> "TextRange":
        """Build a range from two points in either order (e.g. a reversed selection)."""

        first, second = Position.of(anchor), Position.of(active)
        if second < first:
            first, second = second, first
        return cls(first, second)

    @classmethod
    def from_coords(
        cls, start_line: int, start_column: int, end_line: int, end_column: int
    ) -> "TextRange":
        return cls(Position(start_line, start_column), Position(end_line, end_column))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, other: "TextRange") -> bool:
        return self.start <= other.start and other.end <= self.end

    def intersection(self, other: "TextRange") -> Optional["TextRange"]:
        """Overlapping part of both ranges; ``None`` when they are disjoint or only touch."""

        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if start >= end:
            return None
        return TextRange(start, end)

    @property
    def key(self) -> str:
        return f"{self.start}-{self.end}"

    def __str__(self) -> str:
        return f"({self.start})-({self.end})"


__all__ = ["Position", "TextRange"]
