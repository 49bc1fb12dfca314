"""Command registry and the default highlight commands."""

from .defaults import (
    CLEAR_HIGHLIGHTS,
    SET_HIGHLIGHT_COLOR,
    START_HIGHLIGHTING,
    STOP_HIGHLIGHTING,
    default_commands,
    load_default_commands,
)
from .models import CommandRef
from .registry import CommandConflictError, CommandRegistry

__all__ = [
    "CommandRef",
    "CommandRegistry",
    "CommandConflictError",
    "START_HIGHLIGHTING",
    "SET_HIGHLIGHT_COLOR",
    "CLEAR_HIGHLIGHTS",
    "STOP_HIGHLIGHTING",
    "default_commands",
    "load_default_commands",
]
