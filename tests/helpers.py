"""Shared fixtures for session-level tests."""

from __future__ import annotations

from highlight_engine.config import HighlightConfig
from highlight_engine.session import HighlightSession
from highlight_engine.spans import TextRange
from highlight_engine.surface import MemorySurface


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0

    def __call__(self) -> float:
        return self.now


def rng(start_line: int, start_col: int, end_line: int, end_col: int) -> TextRange:
    return TextRange.from_coords(start_line, start_col, end_line, end_col)


def make_session(
    *, quiet_ms: int = 300, eof_padding: bool = True
) -> tuple[HighlightSession, MemorySurface, FakeClock]:
    surface = MemorySurface()
    clock = FakeClock()
    session = HighlightSession(
        surface,
        config=HighlightConfig(quiet_ms=quiet_ms, eof_padding=eof_padding),
        clock=clock,
    )
    return session, surface, clock
