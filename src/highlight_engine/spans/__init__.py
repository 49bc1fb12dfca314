"""Positions, colored spans and the reconciliation algorithm."""

from .intervals import IntervalSet, reconcile, reconcile_all
from .models import DEFAULT_COLOR, PALETTE, ColorStyle, ColorTag, Span
from .position import Position, TextRange
from .validation import SpanValidationError, ensure_position, ensure_range

__all__ = [
    "Position",
    "TextRange",
    "ColorTag",
    "ColorStyle",
    "PALETTE",
    "DEFAULT_COLOR",
    "Span",
    "IntervalSet",
    "reconcile",
    "reconcile_all",
    "SpanValidationError",
    "ensure_position",
    "ensure_range",
]
