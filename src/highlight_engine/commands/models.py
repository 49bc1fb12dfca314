"""Command metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from highlight_engine.session.controller import SessionResult


@dataclass(frozen=True, slots=True)
class CommandRef:
    """A named, argument-less command exposed to the host."""

    id: str
    handler: Callable[[], SessionResult]
    title: str = ""
    telemetry_name: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("CommandRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        if self.telemetry_name is None:
            object.__setattr__(self, "telemetry_name", f"command::{self.id}")

    def __call__(self) -> SessionResult:
        return self.handler()


__all__ = ["CommandRef"]
