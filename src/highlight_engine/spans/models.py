"""Color palette and the colored span record stored per document."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .position import Position, TextRange


class ColorTag(str, Enum):
    """Fixed highlight palette."""

    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PINK = "pink"
    ORANGE = "orange"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_label(cls, label: str) -> "ColorTag":
        cleaned = label.strip().lower()
        for tag in cls:
            if tag.value == cleaned:
                return tag
        raise ValueError(f"Unknown highlight color '{label}'")


@dataclass(frozen=True, slots=True)
class ColorStyle:
    """Paint style a host registers once per color."""

    background: str
    rich_style: str
    border_radius: str = "3px"
    overview_ruler: bool = True
    whole_line: bool = False


PALETTE: Mapping[ColorTag, ColorStyle] = MappingProxyType(
    {
        ColorTag.RED: ColorStyle("rgba(255, 0, 0, 0.7)", "on rgb(255,0,0)"),
        ColorTag.YELLOW: ColorStyle(
            "rgba(255, 255, 0, 0.7)", "black on rgb(255,255,0)"
        ),
        ColorTag.GREEN: ColorStyle("rgba(0, 255, 0, 0.7)", "black on rgb(0,255,0)"),
        ColorTag.BLUE: ColorStyle("rgba(0, 0, 255, 0.7)", "on rgb(0,0,255)"),
        ColorTag.PINK: ColorStyle(
            "rgba(255, 105, 180, 0.7)", "black on rgb(255,105,180)"
        ),
        ColorTag.ORANGE: ColorStyle(
            "rgba(255, 165, 0, 0.7)", "black on rgb(255,165,0)"
        ),
    }
)

DEFAULT_COLOR = ColorTag.RED


@dataclass(frozen=True, slots=True)
class Span:
    """Non-empty highlighted range tagged with a palette color."""

    range: TextRange
    color: ColorTag

    def __post_init__(self) -> None:
        if self.range.is_empty:
            raise ValueError(f"Span cannot be empty: {self.range}")

    @classmethod
    def of(
        cls,
        start: tuple[int, int],
        end: tuple[int, int],
        color: ColorTag | str,
    ) -> "Span":
        return cls(TextRange(Position.of(start), Position.of(end)), ColorTag(color))

    @property
    def start(self) -> Position:
        return self.range.start

    @property
    def end(self) -> Position:
        return self.range.end


__all__ = ["ColorTag", "ColorStyle", "PALETTE", "DEFAULT_COLOR", "Span"]
