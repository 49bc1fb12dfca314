from highlight_engine.session import StabilityDebouncer, selection_key
from highlight_engine.spans import TextRange

from helpers import FakeClock, rng

A = (rng(0, 0, 0, 3),)
B = (rng(0, 0, 0, 7),)


def make_debouncer(quiet_ms: int = 300) -> tuple[StabilityDebouncer, FakeClock]:
    clock = FakeClock()
    return StabilityDebouncer(quiet_ms=quiet_ms, clock=clock), clock


def test_fires_once_after_quiet_period() -> None:
    debouncer, clock = make_debouncer()

    assert debouncer.notify("doc", A) is True
    clock.advance(299)
    assert debouncer.poll() is None

    clock.advance(2)
    fired = debouncer.poll()

    assert fired is not None
    assert fired.ranges == A
    assert debouncer.state == "idle"
    assert debouncer.poll() is None


def test_burst_coalesces_to_last_key() -> None:
    debouncer, clock = make_debouncer()
    fired = []

    for ranges in (A, A, B, B, B):
        debouncer.notify("doc", ranges)
        clock.advance(50)
        result = debouncer.poll()
        if result is not None:
            fired.append(result)

    clock.advance(300)
    result = debouncer.poll()
    if result is not None:
        fired.append(result)

    assert len(fired) == 1
    assert fired[0].ranges == B


def test_same_key_does_not_push_deadline_back() -> None:
    debouncer, clock = make_debouncer()

    debouncer.notify("doc", A)
    clock.advance(200)
    assert debouncer.notify("doc", A) is False
    clock.advance(101)

    assert debouncer.poll() is not None


def test_key_change_restarts_window() -> None:
    debouncer, clock = make_debouncer()

    debouncer.notify("doc", A)
    clock.advance(200)
    debouncer.notify("doc", B)
    clock.advance(200)
    assert debouncer.poll() is None

    clock.advance(101)
    fired = debouncer.poll()
    assert fired is not None and fired.ranges == B


def test_empty_snapshot_leaves_pending_timer_running() -> None:
    debouncer, clock = make_debouncer()

    debouncer.notify("doc", A)
    clock.advance(200)
    assert debouncer.notify("doc", (rng(0, 4, 0, 4),)) is False
    assert debouncer.notify("doc", ()) is False
    clock.advance(101)

    fired = debouncer.poll()
    assert fired is not None and fired.ranges == A


def test_empty_selections_are_dropped_from_snapshot() -> None:
    debouncer, _clock = make_debouncer()

    debouncer.notify("doc", (rng(1, 1, 1, 1),) + A)

    assert debouncer.pending is not None
    assert debouncer.pending.ranges == A


def test_other_document_counts_as_new_key() -> None:
    debouncer, clock = make_debouncer()

    debouncer.notify("one", A)
    clock.advance(200)
    assert debouncer.notify("two", A) is True
    clock.advance(150)
    assert debouncer.poll() is None


def test_cancel_and_flush() -> None:
    debouncer, _clock = make_debouncer()

    debouncer.notify("doc", A)
    debouncer.cancel()
    assert debouncer.flush() is None

    debouncer.notify("doc", B)
    fired = debouncer.flush()
    assert fired is not None and fired.ranges == B
    assert debouncer.state == "idle"


def test_selection_key_concatenates_ranges_in_order() -> None:
    key = selection_key("doc", [TextRange.from_coords(0, 1, 0, 2), rng(3, 0, 4, 5)])

    assert key == "doc|0,1-0,2;3,0-4,5"
