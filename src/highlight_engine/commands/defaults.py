"""The four commands every host exposes."""

from __future__ import annotations

from highlight_engine.session.controller import HighlightSession

from .models import CommandRef
from .registry import CommandRegistry

START_HIGHLIGHTING = "start-highlighting"
SET_HIGHLIGHT_COLOR = "set-highlight-color"
CLEAR_HIGHLIGHTS = "clear-highlights"
STOP_HIGHLIGHTING = "stop-highlighting"


def default_commands(session: HighlightSession) -> tuple[CommandRef, ...]:
    return (
        CommandRef(START_HIGHLIGHTING, session.start, "Start Highlighting"),
        CommandRef(SET_HIGHLIGHT_COLOR, session.request_color, "Set Highlight Color"),
        CommandRef(CLEAR_HIGHLIGHTS, session.clear, "Clear Highlights (Current File)"),
        CommandRef(STOP_HIGHLIGHTING, session.stop, "Stop Highlighting"),
    )


def load_default_commands(
    registry: CommandRegistry, session: HighlightSession
) -> CommandRegistry:
    for command in default_commands(session):
        registry.register(command, replace=True)
    return registry


__all__ = [
    "START_HIGHLIGHTING",
    "SET_HIGHLIGHT_COLOR",
    "CLEAR_HIGHLIGHTS",
    "STOP_HIGHLIGHTING",
    "default_commands",
    "load_default_commands",
]
