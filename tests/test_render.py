from highlight_engine.spans import PALETTE, ColorTag, Span
from highlight_engine.surface import MemorySurface, RenderAdapter, StyleRegistry

from helpers import rng


def make_renderer() -> tuple[RenderAdapter, MemorySurface]:
    surface = MemorySurface()
    return RenderAdapter(StyleRegistry(surface)), surface


def test_render_groups_spans_by_color() -> None:
    renderer, surface = make_renderer()
    editor = surface.open("a.txt", "abcdefghij")

    renderer.render(
        editor,
        [
            Span.of((0, 0), (0, 2), ColorTag.RED),
            Span.of((0, 4), (0, 6), ColorTag.BLUE),
            Span.of((0, 8), (0, 9), ColorTag.RED),
        ],
    )

    red = surface.styles[ColorTag.RED]
    blue = surface.styles[ColorTag.BLUE]
    assert editor.painted() == {
        red: (rng(0, 0, 0, 2), rng(0, 8, 0, 9)),
        blue: (rng(0, 4, 0, 6),),
    }


def test_render_erases_colors_without_spans() -> None:
    renderer, surface = make_renderer()
    editor = surface.open("a.txt", "abcdefghij")
    renderer.render(editor, [Span.of((0, 0), (0, 2), ColorTag.RED)])

    renderer.render(editor, [Span.of((0, 0), (0, 2), ColorTag.GREEN)])

    red = surface.styles[ColorTag.RED]
    green = surface.styles[ColorTag.GREEN]
    assert editor.decorations[red] == ()
    assert editor.painted() == {green: (rng(0, 0, 0, 2),)}


def test_clear_paints_every_style_empty() -> None:
    renderer, surface = make_renderer()
    editor = surface.open("a.txt", "abcdefghij")
    renderer.render(editor, [Span.of((0, 0), (0, 2), ColorTag.ORANGE)])

    renderer.clear(editor)

    assert editor.painted() == {}


def test_style_registry_creates_each_color_once() -> None:
    surface = MemorySurface()
    styles = StyleRegistry(surface)

    first = styles.ensure(ColorTag.PINK)
    second = styles.ensure(ColorTag.PINK)

    assert first is second
    assert first.style == PALETTE[ColorTag.PINK]
    assert first.style.background == "rgba(255, 105, 180, 0.7)"
    assert ColorTag.PINK in styles

    styles.dispose()

    assert ColorTag.PINK not in styles
    assert surface.disposed == [first]
