"""Executable Textual app that hosts the highlight engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.style import Style
    from rich.text import Text
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, Vertical
    from textual.screen import ModalScreen
    from textual.widgets import Footer, Header, OptionList, Static, TextArea
    from textual.widgets.option_list import Option
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use highlight_engine.adapters.textual.app"
    ) from exc

from highlight_engine.commands import (
    CLEAR_HIGHLIGHTS,
    SET_HIGHLIGHT_COLOR,
    START_HIGHLIGHTING,
    STOP_HIGHLIGHTING,
)
from highlight_engine.config import HighlightConfig
from highlight_engine.session import HighlightSession
from highlight_engine.spans import ColorStyle, ColorTag, IntervalSet, Position, TextRange
from highlight_engine.surface.protocol import EditorView, SurfaceEditError

from .controller import TextualHighlightAdapter, TextualUIHooks

SAMPLE_TEXT = """Select some text with the mouse or shift+arrows.
Press F2 to start highlighting, F3 to pick a color,
F4 to clear this file and F5 to stop.
Selecting a highlighted range again removes it."""


@dataclass
class DemoBuffer:
    key: str
    path: Optional[Path]
    text: str


class TextAreaDocument:
    def __init__(self, key: str, area: TextArea) -> None:
        self._key = key
        self._area = area

    @property
    def key(self) -> str:
        return self._key

    @property
    def line_count(self) -> int:
        return self._area.document.line_count

    def line_text(self, index: int) -> str:
        return self._area.document.get_line(index)


class TextAreaEditor:
    """``EditorView`` over the app's single TextArea; the shown buffer can change."""

    def __init__(self, area: TextArea, buffer: DemoBuffer) -> None:
        self.area = area
        self.buffer = buffer
        self.decorations: Dict[object, tuple[TextRange, ...]] = {}

    @property
    def document(self) -> TextAreaDocument:
        return TextAreaDocument(self.buffer.key, self.area)

    def set_decorations(self, style: object, ranges: Sequence[TextRange]) -> None:
        self.decorations[style] = tuple(ranges)

    def insert_text(self, position: Position, text: str) -> None:
        try:
            self.area.insert(text, position.as_tuple())
        except (ValueError, IndexError) as exc:
            raise SurfaceEditError(str(exc), document_key=self.buffer.key) from exc

    def delete_range(self, text_range: TextRange) -> None:
        try:
            self.area.delete(text_range.start.as_tuple(), text_range.end.as_tuple())
        except (ValueError, IndexError) as exc:
            raise SurfaceEditError(str(exc), document_key=self.buffer.key) from exc

    def save(self) -> None:
        self.buffer.text = self.area.text
        if self.buffer.path is None:
            return
        try:
            self.buffer.path.write_text(self.area.text, encoding="utf-8")
        except OSError as exc:
            raise SurfaceEditError(str(exc), document_key=self.buffer.key) from exc

    def offset_at(self, position: Position) -> int:
        document = self.area.document
        offset = sum(len(document.get_line(row)) + 1 for row in range(position.line))
        return offset + position.column


class ColorPickerScreen(ModalScreen[Optional[str]]):
    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, labels: Sequence[str], placeholder: str) -> None:
        super().__init__()
        self._labels = tuple(labels)
        self._placeholder = placeholder

    def compose(self) -> ComposeResult:
        with Vertical(id="picker"):
            yield Static(self._placeholder, id="picker-title")
            yield OptionList(*(Option(label, id=label) for label in self._labels))

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.dismiss(event.option.id)

    def action_cancel(self) -> None:
        self.dismiss(None)


class TextualSurface:
    """``EditorSurface`` backed by the running app."""

    def __init__(self, app: "HighlightApp") -> None:
        self._app = app

    @property
    def active_editor(self) -> Optional[TextAreaEditor]:
        return self._app.editor

    @property
    def visible_editors(self) -> Sequence[TextAreaEditor]:
        return (self._app.editor,) if self._app.editor else ()

    def register_style(self, color: ColorTag, style: ColorStyle) -> Style:
        del color
        return Style.parse(style.rich_style)

    def dispose_style(self, handle: object) -> None:
        del handle  # rich styles hold no host resources

    def show_message(self, text: str) -> None:
        self._app.notify(text)

    def show_pick_list(
        self,
        labels: Sequence[str],
        *,
        placeholder: str,
        on_pick: Callable[[Optional[str]], None],
    ) -> None:
        self._app.push_screen(ColorPickerScreen(labels, placeholder), callback=on_pick)


class HighlightApp(App[None]):
    """TextArea on the left, highlighted preview on the right."""

    CSS = """
	#panes {
		height: 1fr;
	}

	#editor, #preview {
		width: 1fr;
		border: round $accent;
	}

	#preview {
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#picker {
		width: 40;
		height: auto;
		border: round $accent;
		background: $surface;
	}
	"""

    BINDINGS = [
        ("f2", f"command('{START_HIGHLIGHTING}')", "Start"),
        ("f3", f"command('{SET_HIGHLIGHT_COLOR}')", "Color"),
        ("f4", f"command('{CLEAR_HIGHLIGHTS}')", "Clear"),
        ("f5", f"command('{STOP_HIGHLIGHTING}')", "Stop"),
        ("ctrl+n", "next_document", "Next file"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        paths: Sequence[Path] = (),
        *,
        config: Optional[HighlightConfig] = None,
    ) -> None:
        super().__init__()
        self._buffers: List[DemoBuffer] = [_load_buffer(path) for path in paths] or [
            DemoBuffer(key="untitled", path=None, text=SAMPLE_TEXT)
        ]
        self._index = 0
        self._config = config
        self.editor: Optional[TextAreaEditor] = None
        self.adapter: Optional[TextualHighlightAdapter] = None
        self._preview: Optional[Static] = None
        self._status: Optional[Static] = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="panes"):
            yield TextArea(self._buffers[0].text, id="editor")
            yield Static("", id="preview")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        area = self.query_one("#editor", TextArea)
        self._preview = self.query_one("#preview", Static)
        self._status = self.query_one("#status-line", Static)
        self.editor = TextAreaEditor(area, self._buffers[self._index])
        session = HighlightSession(TextualSurface(self), config=self._config)
        hooks = TextualUIHooks(
            update_preview=self._update_preview,
            update_status=self._update_status,
            log=self.log.debug,
        )
        self.adapter = TextualHighlightAdapter(session, hooks)
        self.adapter.switch_editor(self.editor)
        self.set_interval(0.05, self._process_timeouts)

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.session.dispose()

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        if not self.adapter or not self.editor:
            return
        selection = event.selection
        self.adapter.handle_selection(self.editor, [(selection.start, selection.end)])

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        del event
        if self.adapter and self.editor:
            self._update_preview(
                self.editor, self.adapter.session.spans_for(self.editor.buffer.key)
            )

    def action_command(self, command_id: str) -> None:
        if self.adapter:
            self.adapter.run_command(command_id)

    def action_next_document(self) -> None:
        if not self.adapter or not self.editor or len(self._buffers) < 2:
            return
        self.editor.buffer.text = self.editor.area.text
        self._index = (self._index + 1) % len(self._buffers)
        self.editor.buffer = self._buffers[self._index]
        self.editor.decorations.clear()
        self.editor.area.load_text(self.editor.buffer.text)
        self.adapter.switch_editor(self.editor)

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    def _update_preview(self, editor: EditorView, spans: IntervalSet) -> None:
        del spans  # the preview shows what the render adapter painted
        if not isinstance(editor, TextAreaEditor) or self._preview is None:
            return
        text = Text(editor.area.text)
        for style, ranges in editor.decorations.items():
            for rng in ranges:
                text.stylize(
                    style, editor.offset_at(rng.start), editor.offset_at(rng.end)
                )
        self._preview.update(text)

    def _update_status(self, status: str) -> None:
        if self._status is None or self.adapter is None:
            return
        session = self.adapter.session
        mode = "ON" if session.active else "OFF"
        self._status.update(f"[{mode}] {session.color.label} | {status}")


def _load_buffer(path: Path) -> DemoBuffer:
    return DemoBuffer(
        key=str(path.resolve()), path=path, text=path.read_text(encoding="utf-8")
    )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the highlight engine demo.")
    parser.add_argument("paths", nargs="*", type=Path, help="Files to open")
    parser.add_argument(
        "--quiet-ms",
        type=int,
        default=None,
        help="Selection stability window in milliseconds (default: 300)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = HighlightConfig.from_env()
    if args.quiet_ms is not None:
        config = replace(config, quiet_ms=args.quiet_ms)
    HighlightApp(args.paths, config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
