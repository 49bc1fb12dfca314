"""Mutable session state: per-document spans, mode flag, active color."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Set

from highlight_engine.runtime import telemetry
from highlight_engine.spans import DEFAULT_COLOR, ColorTag, IntervalSet, Span


class HighlightStore:
    """Owns every document's spans for the lifetime of the session."""

    def __init__(self) -> None:
        self._sets: Dict[str, IntervalSet] = {}

    def get(self, document_key: str) -> IntervalSet:
        return self._sets.get(document_key, IntervalSet())

    def set(self, document_key: str, spans: Iterable[Span]) -> IntervalSet:
        updated = IntervalSet.of(spans)
        self._sets[document_key] = updated
        return updated

    def clear(self, document_key: str) -> None:
        if document_key in self._sets:
            self._sets[document_key] = IntervalSet()

    def clear_all(self) -> None:
        self._sets.clear()

    def documents(self) -> tuple[str, ...]:
        return tuple(key for key, spans in self._sets.items() if spans)

    def __contains__(self, document_key: object) -> bool:
        return document_key in self._sets


class ModeController:
    """Process-wide on/off switch gating selection events."""

    def __init__(self, active: bool = False) -> None:
        self._active = active

    @property
    def active(self) -> bool:
        return self._active

    def activate(self) -> None:
        self._switch(True)

    def deactivate(self) -> None:
        self._switch(False)

    def _switch(self, value: bool) -> None:
        if value is self._active:
            return
        self._active = value
        telemetry.record_event("mode.switch", data={"active": value})


@dataclass
class SessionState:
    store: HighlightStore = field(default_factory=HighlightStore)
    mode: ModeController = field(default_factory=ModeController)
    color: ColorTag = DEFAULT_COLOR
    # Documents whose trailing blank line was inserted by the engine.
    padded: Set[str] = field(default_factory=set)

    def reset(self) -> None:
        self.store.clear_all()
        self.mode.deactivate()


__all__ = ["HighlightStore", "ModeController", "SessionState"]
