"""Session controller, debouncer and per-document state."""

from .controller import HighlightSession, SessionResult
from .debouncer import PendingSelection, StabilityDebouncer, selection_key
from .eof import end_of_document, pad_end, touches_end, unpad_end
from .state import HighlightStore, ModeController, SessionState

__all__ = [
    "HighlightSession",
    "SessionResult",
    "StabilityDebouncer",
    "PendingSelection",
    "selection_key",
    "HighlightStore",
    "ModeController",
    "SessionState",
    "end_of_document",
    "touches_end",
    "pad_end",
    "unpad_end",
]
