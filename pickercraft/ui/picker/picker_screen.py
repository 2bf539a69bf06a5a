"""
Picker Screen - prompt, result list and preview pane.

Layout:
- Prompt input at top
- Result list (one row per Result)
- Preview pane with syntax highlighting
- Status bar at bottom

The screen is purely a projection. Keystrokes are forwarded to the presenter;
the presenter drives rendering through TextualPickerView.
"""

import logging
from typing import Callable, List, Optional, Sequence

from rich.console import RenderableType
from rich.syntax import Syntax
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Input, OptionList, RichLog, Static
from textual.widgets.option_list import Option

from ...config.constants import PROMPT_PLACEHOLDER
from ...services.result_parser import Result
from .picker_presenter import PickerPresenter

logger = logging.getLogger(__name__)

PREVIEW_CONTEXT_LINES = 5  # Lines kept above a match when scrolling the preview


def format_result(result: Result) -> Text:
    """Result row, with the matched text emphasised for located results."""
    if not result.is_located:
        return Text(result.file)
    text = Text()
    text.append(result.file, style="cyan")
    text.append(f":{result.line}:{result.column}: ", style="dim")
    text.append(result.match or "")
    return text


def render_preview(
    item: Result, lines: Sequence[str], lexer: Optional[str] = None
) -> RenderableType:
    """Preview renderable; highlighted as ``lexer`` when one is known."""
    content = "\n".join(lines)
    if lexer:
        return Syntax(
            content,
            lexer,
            line_numbers=True,
            highlight_lines={item.line} if item.is_located else None,
        )
    return Text.from_ansi(content)


class PickerScreen(Screen):
    """Full-screen picker."""

    BINDINGS = [
        Binding("down", "cursor_down", "Down", priority=True),
        Binding("ctrl+n", "cursor_down", "Down", show=False, priority=True),
        Binding("up", "cursor_up", "Up", priority=True),
        Binding("ctrl+p", "cursor_up", "Up", show=False, priority=True),
        Binding("escape", "close", "Close", priority=True),
    ]

    DEFAULT_CSS = """
    PickerScreen {
        layout: grid;
        grid-size: 1;
        grid-rows: 3 2fr 3fr 1;
    }

    #prompt {
        border: solid $primary;
    }

    #results {
        height: 1fr;
        scrollbar-gutter: stable;
    }

    #preview {
        height: 1fr;
        border-top: solid $primary-darken-1;
    }

    #status {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        detect_filetype: Optional[Callable[[str], Optional[str]]] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.presenter: Optional[PickerPresenter] = None
        self.detect_filetype = detect_filetype
        self.current_selection = 1

        # Latest state, applied on mount if it arrives earlier
        self._result_items: List[Result] = []
        self._placeholder_text: Optional[str] = None
        self._pending_preview: Optional[tuple] = None

    def compose(self) -> ComposeResult:
        yield Input(placeholder=PROMPT_PLACEHOLDER, id="prompt")
        yield OptionList(id="results")
        yield RichLog(id="preview", wrap=False, auto_scroll=False)
        yield Static("", id="status")

    def on_mount(self) -> None:
        self.query_one("#results", OptionList).can_focus = False
        self.query_one("#prompt", Input).focus()
        self._render_list()
        if self._pending_preview is not None:
            self._render_preview(*self._pending_preview)

    # ------------------------------------------------------------------
    # Rendering (called through TextualPickerView)
    # ------------------------------------------------------------------

    def show_results(self, results: Sequence[Result]) -> None:
        self._result_items = list(results)
        self._placeholder_text = None
        self.current_selection = 1
        if not results:
            self._pending_preview = None
        if self.is_mounted:
            self._render_list()
            if not results:
                self.query_one("#preview", RichLog).clear()

    def set_placeholder(self, text: str) -> None:
        self._result_items = []
        self._placeholder_text = text
        self._pending_preview = None
        self.current_selection = 1
        if self.is_mounted:
            self._render_list()
            self.query_one("#preview", RichLog).clear()

    def move(self, selection: int, result_count: int) -> None:
        if result_count == 0:
            return
        self.current_selection = max(1, min(selection, result_count))
        if self.is_mounted:
            self.query_one("#results", OptionList).highlighted = self.current_selection - 1
            self._render_status()

    def preview(self, item: Result, lines: Sequence[str]) -> None:
        self._pending_preview = (item, list(lines))
        if self.is_mounted:
            self._render_preview(item, lines)

    def _render_list(self) -> None:
        results_list = self.query_one("#results", OptionList)
        results_list.clear_options()

        if self._placeholder_text is not None:
            results_list.add_option(Option(Text(self._placeholder_text, style="dim"), disabled=True))
        else:
            results_list.add_options([Option(format_result(r)) for r in self._result_items])
            if self._result_items:
                results_list.highlighted = self.current_selection - 1
        self._render_status()

    def _render_preview(self, item: Result, lines: Sequence[str]) -> None:
        lexer = self.detect_filetype(item.file) if self.detect_filetype else None
        log = self.query_one("#preview", RichLog)
        log.clear()
        log.write(render_preview(item, lines, lexer))
        if item.is_located:
            target = max(item.line - 1 - PREVIEW_CONTEXT_LINES, 0)
            self.call_after_refresh(log.scroll_to, y=target, animate=False)

    def _render_status(self) -> None:
        status = self.query_one("#status", Static)
        if self._placeholder_text is not None or not self._result_items:
            status.update("No results" if self._placeholder_text is None else "")
            return
        status.update(
            f"{self.current_selection}/{len(self._result_items)} | ↑↓ move | Enter open | Esc close"
        )

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "prompt" and self.presenter:
            self.presenter.on_search(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "prompt" and self.presenter:
            self.presenter.on_open(self.current_selection)

    # Highlight changes only come from the presenter via move(), so
    # OptionHighlighted is not handled.

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if self.presenter and self._result_items:
            self.presenter.on_open(event.option_index + 1)

    def action_cursor_down(self) -> None:
        if self.presenter:
            self.presenter.on_move(self.current_selection + 1)

    def action_cursor_up(self) -> None:
        if self.presenter:
            self.presenter.on_move(self.current_selection - 1)

    def action_close(self) -> None:
        if self.presenter:
            self.presenter.on_close()


class TextualPickerView:
    """PickerView backed by a PickerScreen inside a running App.

    ``on_umount`` is called when the presenter tears the picker down; the app
    decides whether that pops the screen or exits.
    """

    def __init__(
        self,
        app: App,
        screen: PickerScreen,
        on_umount: Optional[Callable[[], None]] = None,
    ):
        self.app = app
        self.screen = screen
        self.on_umount = on_umount

    def bind(self, presenter: PickerPresenter) -> None:
        self.screen.presenter = presenter

    def mount(self) -> None:
        self.app.push_screen(self.screen)

    def umount(self) -> None:
        if self.on_umount is not None:
            self.on_umount()
        elif self.screen.is_current:
            self.app.pop_screen()

    def show_results(self, results: Sequence[Result]) -> None:
        self.screen.show_results(results)

    def preview(self, item: Result, lines: Sequence[str]) -> None:
        self.screen.preview(item, lines)

    def set_placeholder(self, text: str) -> None:
        self.screen.set_placeholder(text)

    def move(self, selection: int, result_count: int) -> None:
        self.screen.move(selection, result_count)
