from typing import Iterable

import pytest

from highlight_engine.spans import (
    ColorTag,
    IntervalSet,
    Span,
    TextRange,
    reconcile,
    reconcile_all,
)

RED = ColorTag.RED
BLUE = ColorTag.BLUE


def line_range(start: int, end: int, line: int = 0) -> TextRange:
    return TextRange.from_coords(line, start, line, end)


def as_set(spans: Iterable[Span]) -> set[Span]:
    return set(spans)


def covered(spans: Iterable[Span]) -> int:
    # single-line fixtures only
    return sum(span.end.column - span.start.column for span in spans)


def test_empty_set_gains_selection() -> None:
    result = reconcile((), line_range(0, 5), RED)

    assert result == (Span.of((0, 0), (0, 5), RED),)


def test_exact_match_same_color_toggles_off() -> None:
    existing = (Span.of((0, 0), (0, 10), RED),)

    assert reconcile(existing, line_range(0, 10), RED) == ()


def test_selection_inside_other_color_recolors_slice() -> None:
    existing = (Span.of((0, 0), (0, 10), RED),)

    result = reconcile(existing, line_range(3, 6), BLUE)

    assert as_set(result) == {
        Span.of((0, 0), (0, 3), RED),
        Span.of((0, 3), (0, 6), BLUE),
        Span.of((0, 6), (0, 10), RED),
    }


def test_exact_match_other_color_replaces() -> None:
    existing = (Span.of((0, 0), (0, 5), RED),)

    result = reconcile(existing, line_range(0, 5), BLUE)

    assert result == (Span.of((0, 0), (0, 5), BLUE),)


def test_selection_inside_same_color_cuts_hole() -> None:
    existing = (Span.of((0, 0), (0, 10), RED),)

    result = reconcile(existing, line_range(3, 6), RED)

    assert as_set(result) == {
        Span.of((0, 0), (0, 3), RED),
        Span.of((0, 6), (0, 10), RED),
    }


def test_partial_overlap_trims_and_adds() -> None:
    existing = (Span.of((0, 0), (0, 6), RED),)

    result = reconcile(existing, line_range(4, 9), BLUE)

    assert as_set(result) == {
        Span.of((0, 0), (0, 4), RED),
        Span.of((0, 4), (0, 9), BLUE),
    }


def test_selection_over_two_adjacent_colors_trims_both() -> None:
    existing = (
        Span.of((0, 0), (0, 5), RED),
        Span.of((0, 5), (0, 10), BLUE),
    )

    result = reconcile(existing, line_range(3, 7), ColorTag.GREEN)

    assert as_set(result) == {
        Span.of((0, 0), (0, 3), RED),
        Span.of((0, 3), (0, 7), ColorTag.GREEN),
        Span.of((0, 7), (0, 10), BLUE),
    }


def test_selection_swallowing_spans_replaces_them() -> None:
    existing = (
        Span.of((0, 2), (0, 4), RED),
        Span.of((1, 0), (1, 3), BLUE),
    )

    result = reconcile(existing, TextRange.from_coords(0, 0, 2, 0), RED)

    assert result == (Span(TextRange.from_coords(0, 0, 2, 0), RED),)


def test_multiline_trim_keeps_pieces_on_other_lines() -> None:
    existing = (Span(TextRange.from_coords(0, 4, 2, 3), RED),)

    result = reconcile(existing, TextRange.from_coords(1, 0, 1, 8), BLUE)

    assert as_set(result) == {
        Span(TextRange.from_coords(0, 4, 1, 0), RED),
        Span(TextRange.from_coords(1, 0, 1, 8), BLUE),
        Span(TextRange.from_coords(1, 8, 2, 3), RED),
    }


def test_empty_range_leaves_set_untouched() -> None:
    existing = (Span.of((0, 0), (0, 4), RED),)

    assert reconcile(existing, line_range(2, 2), BLUE) == existing


def test_selections_in_one_event_fold_sequentially() -> None:
    # the second selection sees the span added by the first and toggles it off
    result = reconcile_all((), [line_range(0, 4), line_range(0, 4)], RED)

    assert result == ()


def test_disjoint_selections_in_one_event_all_apply() -> None:
    result = reconcile_all((), [line_range(0, 2), line_range(5, 8)], RED)

    assert as_set(result) == {
        Span.of((0, 0), (0, 2), RED),
        Span.of((0, 5), (0, 8), RED),
    }


@pytest.mark.parametrize(
    "existing",
    [
        (),
        (Span.of((0, 0), (0, 3), RED),),
        (Span.of((0, 0), (0, 3), RED), Span.of((1, 0), (1, 9), BLUE)),
    ],
)
def test_toggle_is_its_own_inverse(existing: tuple[Span, ...]) -> None:
    rng = line_range(4, 8)

    once = reconcile(existing, rng, RED)
    twice = reconcile(once, rng, RED)

    assert as_set(twice) == as_set(existing)
    assert covered(once) == covered(existing) + 4


def test_toggle_with_changed_color_replaces_instead_of_inverting() -> None:
    rng = line_range(4, 8)

    once = reconcile((), rng, RED)
    twice = reconcile(once, rng, BLUE)

    assert twice == (Span(rng, BLUE),)


def test_fully_covered_range_loses_its_length() -> None:
    existing = (Span.of((0, 0), (0, 20), RED),)

    result = reconcile(existing, line_range(5, 9), RED)

    assert covered(result) == covered(existing) - 4


def test_results_never_hold_degenerate_or_duplicate_spans() -> None:
    spans: tuple[Span, ...] = ()
    ops = [
        (line_range(0, 10), RED),
        (line_range(0, 3), BLUE),
        (line_range(3, 10), BLUE),
        (line_range(2, 5), RED),
        (line_range(0, 10), ColorTag.PINK),
        (line_range(9, 10), ColorTag.PINK),
    ]
    for rng, color in ops:
        spans = reconcile(spans, rng, color)
        assert all(not span.range.is_empty for span in spans)
        ranges = [span.range for span in spans]
        assert len(ranges) == len(set(ranges))
        ordered = sorted(ranges, key=lambda r: (r.start, r.end))
        for left, right in zip(ordered, ordered[1:]):
            assert left.end <= right.start


def test_interval_set_groups_ranges_by_color() -> None:
    spans = IntervalSet.of(
        [
            Span.of((0, 0), (0, 2), RED),
            Span.of((0, 4), (0, 6), BLUE),
            Span.of((1, 0), (1, 1), RED),
        ]
    )

    grouped = spans.by_color()

    assert grouped[RED] == [line_range(0, 2), line_range(0, 1, line=1)]
    assert grouped[BLUE] == [line_range(4, 6)]


def test_interval_set_apply_returns_new_set() -> None:
    base = IntervalSet()

    updated = base.apply([line_range(1, 3)], ColorTag.ORANGE)

    assert not base
    assert len(updated) == 1
    assert updated.ordered()[0].color is ColorTag.ORANGE


def test_empty_span_rejected() -> None:
    with pytest.raises(ValueError):
        Span.of((0, 1), (0, 1), RED)
