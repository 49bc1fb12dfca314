"""Session controller wiring host events and commands to the engine.

A ``HighlightSession`` owns no global state: the ``SessionState`` it works on
is injected (or created fresh), and every handler runs to completion on the
host's event loop. The only deferred work is the debounced selection, which
the host fires by calling ``process_timeouts`` periodically.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from highlight_engine.config import HighlightConfig
from highlight_engine.runtime import telemetry
from highlight_engine.spans import (
    ColorTag,
    IntervalSet,
    Span,
    SpanValidationError,
    ensure_range,
)
from highlight_engine.surface.protocol import (
    EditorSurface,
    EditorView,
    SelectionEvent,
    SurfaceEditError,
)
from highlight_engine.surface.render import RenderAdapter, StyleRegistry

from .debouncer import PendingSelection, StabilityDebouncer
from .eof import pad_end, unpad_end
from .state import SessionState

START_MESSAGE = "Highlighting mode started. Select text to toggle highlights."
CLEAR_MESSAGE = "Cleared highlights for current file (still in highlight mode)."
STOP_MESSAGE = "Stopped highlight mode and cleared all highlights."
PICK_PLACEHOLDER = "Pick a highlight color"


@dataclass(slots=True)
class SessionResult:
    """Outcome of a command handler."""

    ok: bool = True
    status: str = "ok"
    message: Optional[str] = None


class HighlightSession:
    def __init__(
        self,
        surface: EditorSurface,
        *,
        state: Optional[SessionState] = None,
        config: Optional[HighlightConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.surface = surface
        self.config = config or HighlightConfig.from_env()
        self.state = state or SessionState(color=self.config.default_color)
        self.styles = StyleRegistry(surface)
        self.renderer = RenderAdapter(self.styles)
        self.debouncer = StabilityDebouncer(quiet_ms=self.config.quiet_ms, clock=clock)

    @property
    def active(self) -> bool:
        return self.state.mode.active

    @property
    def color(self) -> ColorTag:
        return self.state.color

    def spans_for(self, document_key: str) -> IntervalSet:
        return self.state.store.get(document_key)

    # -- commands -----------------------------------------------------------

    def start(self) -> SessionResult:
        self.state.mode.activate()
        editor = self.surface.active_editor
        if editor is not None:
            spans = self.state.store.get(editor.document.key).spans
            self._pad(editor, spans)
            self.renderer.render(editor, spans)
        self.surface.show_message(START_MESSAGE)
        return SessionResult(status="started", message=START_MESSAGE)

    def request_color(self) -> SessionResult:
        self.surface.show_pick_list(
            [tag.label for tag in ColorTag],
            placeholder=PICK_PLACEHOLDER,
            on_pick=self._on_color_picked,
        )
        return SessionResult(status="color_prompt")

    def set_color(self, color: ColorTag) -> SessionResult:
        self.state.color = color
        self.styles.ensure(color)
        telemetry.record_event("color.set", data={"color": color.value})
        message = f"Highlight color set to {color.label}"
        return SessionResult(status="color_set", message=message)

    def clear(self) -> SessionResult:
        editor = self.surface.active_editor
        if editor is None:
            return SessionResult(status="no_editor")
        self.state.store.clear(editor.document.key)
        self.renderer.clear(editor)
        if self._unpad(editor):
            editor.save()
        self.surface.show_message(CLEAR_MESSAGE)
        return SessionResult(status="cleared", message=CLEAR_MESSAGE)

    def stop(self) -> SessionResult:
        self.debouncer.cancel()
        self.state.reset()
        for editor in self.surface.visible_editors:
            self.renderer.clear(editor)
            if self._unpad(editor):
                editor.save()
        self.surface.show_message(STOP_MESSAGE)
        return SessionResult(status="stopped", message=STOP_MESSAGE)

    def dispose(self) -> None:
        self.debouncer.cancel()
        self.styles.dispose()

    # -- host events --------------------------------------------------------

    def on_selection_changed(self, event: SelectionEvent) -> bool:
        """Feed a selection snapshot to the debouncer; ``True`` if a window was armed."""

        if not self.state.mode.active:
            return False
        document = event.editor.document
        ranges = []
        for selection in event.non_empty:
            try:
                ranges.append(ensure_range(document, selection))
            except SpanValidationError as exc:
                telemetry.record_event(
                    "selection.invalid",
                    level="warning",
                    data={"document": document.key, "range": selection, "error": exc},
                )
        if not ranges:
            return False
        return self.debouncer.notify(document.key, ranges, payload=event.editor)

    def on_active_editor_changed(self, editor: Optional[EditorView]) -> None:
        if editor is None:
            return
        self.renderer.render(editor, self.state.store.get(editor.document.key).spans)

    def process_timeouts(self) -> Optional[IntervalSet]:
        pending = self.debouncer.poll()
        if pending is None:
            return None
        return self._commit(pending)

    def flush(self) -> Optional[IntervalSet]:
        pending = self.debouncer.flush()
        if pending is None:
            return None
        return self._commit(pending)

    # -- internals ----------------------------------------------------------

    def _on_color_picked(self, label: Optional[str]) -> None:
        if label is None:
            return
        result = self.set_color(ColorTag.from_label(label))
        if result.message:
            self.surface.show_message(result.message)

    def _commit(self, pending: PendingSelection) -> Optional[IntervalSet]:
        if not self.state.mode.active:
            return None
        store = self.state.store
        with telemetry.span(
            "session::reconcile",
            component="session",
            metadata={
                "document": pending.document_key,
                "selections": len(pending.ranges),
                "color": self.state.color.value,
            },
        ) as handle:
            current = store.get(pending.document_key)
            updated = store.set(
                pending.document_key, current.apply(pending.ranges, self.state.color)
            )
            handle.add_metadata("spans", len(updated))

        editor = pending.payload
        if editor is not None and editor.document.key == pending.document_key:
            self._pad(editor, updated.spans)
            self.renderer.render(editor, updated.spans)
        return updated

    def _pad(self, editor: EditorView, spans: tuple[Span, ...]) -> bool:
        if not self.config.eof_padding:
            return False
        try:
            return pad_end(editor, spans, self.state.padded)
        except SurfaceEditError as exc:
            self._edit_failed(editor, "pad", exc)
            return False

    def _unpad(self, editor: EditorView) -> bool:
        try:
            return unpad_end(editor, self.state.padded)
        except SurfaceEditError as exc:
            self._edit_failed(editor, "unpad", exc)
            return False

    def _edit_failed(self, editor: EditorView, action: str, exc: Exception) -> None:
        telemetry.record_event(
            "eof.edit_failed",
            level="warning",
            data={"document": editor.document.key, "action": action, "error": exc},
        )


__all__ = [
    "HighlightSession",
    "SessionResult",
    "START_MESSAGE",
    "CLEAR_MESSAGE",
    "STOP_MESSAGE",
    "PICK_PLACEHOLDER",
]
