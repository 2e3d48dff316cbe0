"""
Command Palette TUI - renders controller state with Textual.

The controller owns all palette state; this module only paints RenderState
snapshots and forwards key presses and input edits to the controller.
"""

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Input, Static

from cmdpal.config.constants import CATEGORY_TRUNCATE_LENGTH, TITLE_TRUNCATE_LENGTH
from cmdpal.core.controller import PaletteController, RenderState
from cmdpal.core.fuzzy import FuzzyMatcher
from cmdpal.core.registry import CommandRegistry
from cmdpal.host.demo import DemoSession

logger = logging.getLogger(__name__)

HINTS = "↑↓ Navigate │ Enter Execute │ Esc Close"


def _truncate(text: str, length: int) -> str:
    if len(text) > length:
        return text[: length - 3] + "..."
    return text


def render_results(state: RenderState, matcher: FuzzyMatcher | None = None) -> Text:
    """Build the visible result rows, highlighting matched title characters."""
    matcher = matcher or FuzzyMatcher()
    output = Text()

    if not state.entries:
        output.append("No matching commands", style="dim")
        return output

    query = state.query.strip()
    if state.scroll_offset > 0:
        output.append("▲\n", style="dim")

    for offset, entry in enumerate(state.window):
        index = state.scroll_offset + offset
        selected = index == state.selected_index
        row_style = "reverse" if selected else ""

        category = _truncate(entry.category, CATEGORY_TRUNCATE_LENGTH)
        output.append(f"{category:<{CATEGORY_TRUNCATE_LENGTH}} ", style=f"yellow {row_style}".strip())

        title = _truncate(entry.title, TITLE_TRUNCATE_LENGTH)
        for segment in matcher.highlight(query, title):
            style = "bold cyan" if segment.matched else ""
            output.append(segment.text, style=f"{style} {row_style}".strip())

        output.append(f"  {index + 1}", style="dim")
        if offset < len(state.window) - 1:
            output.append("\n")

    if state.scroll_offset + state.max_visible < len(state.entries):
        output.append("\n▼", style="dim")

    return output


def render_status(state: RenderState) -> str:
    return f"{state.filtered_count} of {state.total_count} commands   {HINTS}"


class PaletteView(Vertical):
    """Search input, result list and status line."""

    DEFAULT_CSS = """
    PaletteView {
        width: 80;
        height: auto;
        max-height: 20;
        border: solid $primary;
        background: $surface;
    }

    #palette-input {
        border: none;
        border-bottom: solid $primary-darken-1;
    }

    #palette-results {
        height: auto;
        min-height: 3;
        padding: 0 1;
    }

    #palette-status {
        height: 1;
        color: $text-muted;
        padding: 0 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield Input(placeholder="> Search commands...", id="palette-input")
        yield Static(id="palette-results")
        yield Static(id="palette-status")


class PaletteApp(App):
    """Standalone palette driving a demo session."""

    # ctrl+p belongs to our own cursor binding
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        align: center top;
        padding-top: 2;
    }

    #session-status {
        width: 80;
        height: auto;
        color: $text-muted;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+k", "toggle_palette", "Palette", priority=True),
        Binding("up", "cursor_up", "Up", show=False, priority=True),
        Binding("down", "cursor_down", "Down", show=False, priority=True),
        Binding("ctrl+p", "cursor_up", "Up", show=False),
        Binding("ctrl+n", "cursor_down", "Down", show=False),
        Binding("escape", "cancel", "Close", show=False, priority=True),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        registry: CommandRegistry,
        session: DemoSession | None = None,
        *,
        max_visible: int | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.session = session or DemoSession.with_defaults()
        self.matcher = FuzzyMatcher()
        options = {"max_visible": max_visible} if max_visible else {}
        self.controller = PaletteController(
            registry,
            environment=self.session.snapshot,
            executor=self.session.build_dispatcher().execute,
            matcher=self.matcher,
            on_render=self._on_render,
            on_closed=self._on_closed,
            on_error=self._on_error,
            **options,
        )

    def compose(self) -> ComposeResult:
        yield Static(id="session-status")
        yield PaletteView(id="palette")
        yield Footer()

    def on_mount(self) -> None:
        self._update_session_status()
        self.controller.open()

    # ------------------------------------------------------------------ controller callbacks

    def _on_render(self, state: RenderState) -> None:
        palette = self.query_one("#palette", PaletteView)
        palette.display = state.visible
        self.query_one("#palette-results", Static).update(render_results(state, self.matcher))
        self.query_one("#palette-status", Static).update(render_status(state))
        if state.visible:
            self.query_one("#palette-input", Input).focus()

    def _on_closed(self) -> None:
        self.query_one("#palette-input", Input).value = ""
        self._update_session_status()

    def _on_error(self, message: str) -> None:
        self.notify(message, severity="error")

    def _update_session_status(self) -> None:
        session = self.session
        track = session.current_track
        lines = [
            f"Transport: {'playing' if session.is_playing else 'stopped'}"
            f"   View: {session.view_mode.value}"
            f"   Track: {track.name if track else '-'}",
        ]
        if session.log:
            lines.append(f"Last: {session.log[-1]}")
        lines.append("Ctrl+K palette │ Ctrl+Q quit")
        self.query_one("#session-status", Static).update("\n".join(lines))

    # ------------------------------------------------------------------ input

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "palette-input":
            self.controller.set_query(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "palette-input":
            outcome = self.controller.confirm()
            if outcome is not None and outcome.succeeded:
                logger.debug(f"Executed {outcome.action_key}")

    def action_toggle_palette(self) -> None:
        self.controller.toggle()

    def action_cursor_up(self) -> None:
        self.controller.navigate(-1)

    def action_cursor_down(self) -> None:
        self.controller.navigate(1)

    def action_cancel(self) -> None:
        if self.controller.is_open:
            self.controller.cancel()
        else:
            self.exit()
