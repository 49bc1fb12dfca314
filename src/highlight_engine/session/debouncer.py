"""Quiet-period debouncing of selection snapshots.

The debouncer is a two-state machine, ``idle`` or ``pending``:

========================  ==========================================
event                     transition
========================  ==========================================
empty snapshot            ignored, state unchanged
same key while pending    ignored, deadline is *not* pushed back
new key (or idle)         supersede, ``pending(key, now + quiet)``
``poll`` past deadline    return the pending entry, go ``idle``
``cancel``                drop the pending entry, go ``idle``
========================  ==========================================

The host drives ``poll`` from its event loop; superseded entries never fire.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from highlight_engine.config import DEFAULT_QUIET_MS
from highlight_engine.runtime import telemetry
from highlight_engine.spans import TextRange


def selection_key(document_key: str, ranges: Sequence[TextRange]) -> str:
    return f"{document_key}|" + ";".join(rng.key for rng in ranges)


@dataclass(frozen=True, slots=True)
class PendingSelection:
    key: str
    document_key: str
    ranges: tuple[TextRange, ...]
    deadline: float
    generation: int
    payload: object = None


class StabilityDebouncer:
    def __init__(
        self,
        *,
        quiet_ms: int = DEFAULT_QUIET_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.quiet_ms = quiet_ms
        self._clock = clock
        self._pending: Optional[PendingSelection] = None
        self._generation = 0

    @property
    def state(self) -> str:
        return "idle" if self._pending is None else "pending"

    @property
    def pending(self) -> Optional[PendingSelection]:
        return self._pending

    def notify(
        self,
        document_key: str,
        ranges: Sequence[TextRange],
        *,
        payload: object = None,
    ) -> bool:
        """Register a snapshot; return ``True`` when a new window was armed."""

        snapshot = tuple(rng for rng in ranges if not rng.is_empty)
        if not snapshot:
            return False
        key = selection_key(document_key, snapshot)
        if self._pending is not None and self._pending.key == key:
            return False
        if self._pending is not None:
            telemetry.record_event(
                "debounce.superseded",
                level="debug",
                data={"previous": self._pending.key, "next": key},
            )
        self._generation += 1
        self._pending = PendingSelection(
            key=key,
            document_key=document_key,
            ranges=snapshot,
            deadline=self._clock() + self.quiet_ms / 1000.0,
            generation=self._generation,
            payload=payload,
        )
        return True

    def poll(self) -> Optional[PendingSelection]:
        pending = self._pending
        if pending is None or self._clock() < pending.deadline:
            return None
        return self._fire(pending.generation)

    def flush(self) -> Optional[PendingSelection]:
        if self._pending is None:
            return None
        return self._fire(self._pending.generation)

    def cancel(self) -> None:
        self._pending = None

    def _fire(self, generation: int) -> Optional[PendingSelection]:
        pending = self._pending
        if pending is None or pending.generation != generation:
            return None
        self._pending = None
        return pending


__all__ = ["PendingSelection", "StabilityDebouncer", "selection_key"]
