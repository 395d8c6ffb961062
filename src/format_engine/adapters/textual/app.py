"""Executable Textual app that formats a file in a ``TextArea``."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static, TextArea
    from textual.widgets.text_area import Selection as TextAreaSelection
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use format_engine.adapters.textual.app"
    ) from exc

from format_engine.buffer import HostBuffer
from format_engine.runtime.telemetry import ENV_PREFIX, Event, record_event
from format_engine.session import FormatConfig, FormatSession
from format_engine.styles import DefaultStyleProvider, FileConfigSource

from .controller import (
    TextualFormatAdapter,
    TextualUIHooks,
    selection_from_textual,
    selection_to_textual,
)


def create_session(
    config: FormatConfig, *, custom_config: Optional[Path] = None
) -> FormatSession:
    """Build a session using the bundled formatter and a file-backed custom style."""

    source = FileConfigSource(custom_config) if custom_config else None
    return FormatSession(config, style_provider=DefaultStyleProvider(source))


@dataclass
class UIState:
    status_text: str = ""
    formatted_count: int = 0


class FormatEngineApp(App[None]):
    """Minimal editor that reformats its buffer on demand."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+f", "format", "Format"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: FormatSession, *, text: str = "") -> None:
        super().__init__()
        self.session = session
        self._initial_text = text
        self._state = UIState()
        self.adapter: TextualFormatAdapter | None = None
        self._editor: TextArea | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._editor = TextArea(self._initial_text, id="editor")
        yield self._editor
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualFormatAdapter(self.session, hooks)
        self._update_status(f"style: {self.session.config.style}  (ctrl+f to format)")

    def action_format(self) -> None:
        if not self.adapter or not self._editor:
            return
        current = self._editor.selection
        selection = selection_from_textual(current.start, current.end)
        self.adapter.format_buffer(self._editor.text, [selection])

    def _update_buffer(self, buffer: HostBuffer) -> None:
        if not self._editor:
            return
        self._editor.load_text(buffer.text)
        if buffer.selections:
            start, end = selection_to_textual(buffer.selections[0])
            self._editor.selection = TextAreaSelection(start, end)
        self._state.formatted_count += 1

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        record_event(
            Event.HOST_LOG,
            level="debug",
            logger_name="format_engine.app",
            line=line,
        )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the format engine Textual demo.")
    parser.add_argument("path", nargs="?", help="File to load into the editor")
    parser.add_argument(
        "--style",
        default=os.environ.get(f"{ENV_PREFIX}STYLE"),
        help="Predefined style name or 'custom' (default: llvm)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Style document used when --style is 'custom'",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = FormatConfig.from_env()
    if args.style:
        config = config.with_style(args.style)
    text = ""
    if args.path:
        path = Path(args.path)
        text = path.read_text(encoding="utf-8")
        config = config.with_filename(path.name)
    app = FormatEngineApp(create_session(config, custom_config=args.config), text=text)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
