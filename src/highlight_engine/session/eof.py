"""Trailing blank line kept below a highlight that runs to end of file.

The engine inserts the line at most once per document and only removes a line
it inserted itself.
"""

from __future__ import annotations

from typing import Iterable, Set

from highlight_engine.runtime import telemetry
from highlight_engine.spans import Position, Span, TextRange

from highlight_engine.surface.protocol import EditorView, TextDocument, is_blank


def end_of_document(document: TextDocument) -> Position:
    last = document.line_count - 1
    return Position(last, len(document.line_text(last)))


def touches_end(spans: Iterable[Span], document: TextDocument) -> bool:
    if document.line_count == 0:
        return False
    end = end_of_document(document)
    return any(span.end == end for span in spans)


def pad_end(editor: EditorView, spans: Iterable[Span], padded: Set[str]) -> bool:
    """Append one newline when a span ends at a non-blank end of file."""

    document = editor.document
    if not touches_end(spans, document):
        return False
    if is_blank(document, document.line_count - 1):
        return False
    editor.insert_text(end_of_document(document), "\n")
    padded.add(document.key)
    telemetry.record_event("eof.padded", data={"document": document.key})
    return True


def unpad_end(editor: EditorView, padded: Set[str]) -> bool:
    """Remove the blank line inserted by ``pad_end``; ``True`` when text changed."""

    document = editor.document
    if document.key not in padded:
        return False
    last = document.line_count - 1
    if last <= 0 or not is_blank(document, last):
        # Replaced by real content (or nothing to remove): forget the flag.
        padded.discard(document.key)
        return False
    previous_end = Position(last - 1, len(document.line_text(last - 1)))
    editor.delete_range(TextRange(previous_end, end_of_document(document)))
    padded.discard(document.key)
    telemetry.record_event("eof.unpadded", data={"document": document.key})
    return True


__all__ = ["end_of_document", "touches_end", "pad_end", "unpad_end"]
