"""Textual host adapter; the runnable app lives in ``app``."""

from .controller import TextualHighlightAdapter, TextualUIHooks

__all__ = ["TextualHighlightAdapter", "TextualUIHooks"]
