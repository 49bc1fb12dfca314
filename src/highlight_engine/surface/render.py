"""Paint a document's spans onto an editor, one style per color."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

from highlight_engine.runtime import telemetry
from highlight_engine.spans import PALETTE, ColorStyle, ColorTag, IntervalSet, Span

from .protocol import EditorSurface, EditorView


class StyleRegistry:
    """Creates paint styles lazily and disposes them on shutdown."""

    def __init__(
        self,
        surface: EditorSurface,
        *,
        palette: Mapping[ColorTag, ColorStyle] = PALETTE,
    ) -> None:
        self._surface = surface
        self._palette = palette
        self._handles: Dict[ColorTag, object] = {}

    def ensure(self, color: ColorTag) -> object:
        handle = self._handles.get(color)
        if handle is None:
            handle = self._surface.register_style(color, self._palette[color])
            self._handles[color] = handle
        return handle

    def items(self) -> tuple[tuple[ColorTag, object], ...]:
        return tuple(self._handles.items())

    def dispose(self) -> None:
        for handle in self._handles.values():
            self._surface.dispose_style(handle)
        self._handles.clear()

    def __contains__(self, color: object) -> bool:
        return color in self._handles


class RenderAdapter:
    def __init__(self, styles: StyleRegistry) -> None:
        self.styles = styles

    def render(self, editor: EditorView, spans: Iterable[Span]) -> None:
        grouped = IntervalSet.of(spans).by_color()
        for color in grouped:
            self.styles.ensure(color)
        with telemetry.span(
            "render::paint",
            component="render",
            metadata={
                "document": editor.document.key,
                "colors": ",".join(color.value for color in grouped),
            },
        ):
            # Colors that no longer have spans are painted empty so stale
            # decorations disappear.
            for color, handle in self.styles.items():
                editor.set_decorations(handle, tuple(grouped.get(color, ())))

    def clear(self, editor: EditorView) -> None:
        for _color, handle in self.styles.items():
            editor.set_decorations(handle, ())


__all__ = ["StyleRegistry", "RenderAdapter"]
