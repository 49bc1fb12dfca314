"""Adapter that wires a HighlightSession into Textual-style UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from highlight_engine.commands import CommandRegistry, load_default_commands
from highlight_engine.session import HighlightSession, SessionResult
from highlight_engine.spans import IntervalSet, TextRange
from highlight_engine.surface.protocol import EditorView, SelectionEvent

Location = Tuple[int, int]


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_preview: Callable[[EditorView, IntervalSet], None]
    update_status: Callable[[str], None] = _noop
    # Optional debug line sink
    log: Callable[[str], None] = _noop


class TextualHighlightAdapter:
    """Bridges widget events and key bindings to the session and its commands."""

    def __init__(
        self,
        session: HighlightSession,
        hooks: TextualUIHooks,
        *,
        registry: Optional[CommandRegistry] = None,
    ) -> None:
        self.session = session
        self.hooks = hooks
        self.registry = registry or load_default_commands(
            CommandRegistry(logger_name="highlight_engine.commands"), session
        )

    def run_command(self, command_id: str) -> SessionResult:
        self._log_state("command ->", command=command_id)
        result = self.registry.execute(command_id)
        self.hooks.update_status(result.message or result.status)
        self._refresh(self.session.surface.active_editor)
        self._log_state("result <-", ok=result.ok, status=result.status)
        return result

    def handle_selection(
        self, editor: EditorView, selections: Iterable[Tuple[Location, Location]]
    ) -> bool:
        """Translate ``(anchor, cursor)`` pairs from a widget into a selection event."""

        ranges = tuple(TextRange.between(anchor, cursor) for anchor, cursor in selections)
        armed = self.session.on_selection_changed(
            SelectionEvent(editor=editor, selections=ranges)
        )
        if armed:
            self._log_state("selection ->", ranges=[str(rng) for rng in ranges])
        return armed

    def process_timeouts(self) -> Optional[IntervalSet]:
        updated = self.session.process_timeouts()
        if updated is not None:
            self.hooks.update_status(f"{len(updated)} highlight(s)")
            self._refresh(self.session.surface.active_editor)
            self._log_state("reconciled <-", spans=len(updated))
        return updated

    def switch_editor(self, editor: Optional[EditorView]) -> None:
        self.session.on_active_editor_changed(editor)
        self._refresh(editor)

    def _refresh(self, editor: Optional[EditorView]) -> None:
        if editor is None:
            return
        self.hooks.update_preview(editor, self.session.spans_for(editor.document.key))

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({key: value for key, value in fields.items() if value is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        editor = self.session.surface.active_editor
        return {
            "active": self.session.active,
            "color": self.session.color.value,
            "document": editor.document.key if editor else None,
            "pending": self.session.debouncer.state,
        }


__all__ = ["TextualHighlightAdapter", "TextualUIHooks"]
