"""Toggle-with-trim reconciliation of a selection against a document's spans.

``reconcile`` is pure: it takes the current spans, one stabilized selection and
the active color, and returns the next spans. The spans of a document stay
pairwise disjoint across calls:

* a span whose range equals the selection is removed; when its color differs
  from the active one the selection is re-added in the active color, so the
  same gesture toggles with one color and recolors with another;
* every other span loses the part that overlaps the selection, keeping the
  non-empty pieces before and after it in its own color;
* a selection strictly inside a span of the active color only cuts a hole
  (it is already highlighted, so selecting it again un-highlights it);
* in every other case the selection is added in the active color.

Several selections from one event are applied with ``reconcile_all``, a left
fold where each selection sees the result of the previous one.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Dict, Iterable, Iterator, List, Sequence

from .models import ColorTag, Span
from .position import TextRange


def _remainders(span: Span, overlap: TextRange) -> Iterator[Span]:
    if span.start < overlap.start:
        yield Span(TextRange(span.start, overlap.start), span.color)
    if overlap.end < span.end:
        yield Span(TextRange(overlap.end, span.end), span.color)


def reconcile(
    spans: Iterable[Span], new_range: TextRange, active_color: ColorTag
) -> tuple[Span, ...]:
    current = tuple(spans)
    if new_range.is_empty:
        return current

    result: List[Span] = []
    exact: Span | None = None
    covered = False
    for span in current:
        if span.range == new_range:
            exact = span
            continue
        if span.color is active_color and span.range.contains(new_range):
            covered = True
        overlap = span.range.intersection(new_range)
        if overlap is None:
            result.append(span)
        else:
            result.extend(_remainders(span, overlap))

    if exact is not None:
        if exact.color is not active_color:
            result.append(Span(new_range, active_color))
    elif not covered:
        result.append(Span(new_range, active_color))
    return tuple(result)


def reconcile_all(
    spans: Iterable[Span], ranges: Iterable[TextRange], active_color: ColorTag
) -> tuple[Span, ...]:
    return reduce(
        lambda acc, rng: reconcile(acc, rng, active_color), ranges, tuple(spans)
    )


@dataclass(frozen=True, slots=True)
class IntervalSet:
    """Immutable view over one document's spans."""

    spans: tuple[Span, ...] = ()

    @classmethod
    def of(cls, spans: Iterable[Span]) -> "IntervalSet":
        return cls(tuple(spans))

    def apply(
        self, ranges: Sequence[TextRange], active_color: ColorTag
    ) -> "IntervalSet":
        return IntervalSet(reconcile_all(self.spans, ranges, active_color))

    def by_color(self) -> Dict[ColorTag, List[TextRange]]:
        grouped: Dict[ColorTag, List[TextRange]] = {}
        for span in self.spans:
            grouped.setdefault(span.color, []).append(span.range)
        return grouped

    def ordered(self) -> tuple[Span, ...]:
        return tuple(sorted(self.spans, key=lambda span: (span.start, span.end)))

    def __iter__(self) -> Iterator[Span]:
        return iter(self.spans)

    def __len__(self) -> int:
        return len(self.spans)

    def __bool__(self) -> bool:
        return bool(self.spans)


__all__ = ["reconcile", "reconcile_all", "IntervalSet"]
