"""
Palette controller: the open/close, query and selection state machine.

The controller owns the only mutable session state. Every input event runs
to completion, re-derives the result list, clamps the selection and pushes a
fresh RenderState to the renderer.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from cmdpal.config.constants import DEFAULT_MAX_VISIBLE_ITEMS
from cmdpal.exceptions import ExecutionError

from .context import filter_by_context
from .fuzzy import FuzzyMatcher
from .models import ActionEntry, EnvironmentSnapshot
from .registry import CommandRegistry

logger = logging.getLogger(__name__)

EnvironmentProvider = Callable[[], EnvironmentSnapshot | None]
Executor = Callable[[str], object]


@dataclass
class PaletteState:
    """Current state of the palette session."""

    visible: bool = False
    query: str = ""
    selected_index: int = 0
    filtered_entries: list[ActionEntry] = field(default_factory=list)
    total_count: int = 0

    @property
    def filtered_count(self) -> int:
        return len(self.filtered_entries)


@dataclass(frozen=True)
class RenderEntry:
    """What the renderer needs to draw one row."""

    title: str
    category: str


@dataclass(frozen=True)
class RenderState:
    """A complete picture of the palette; replaces any previous one."""

    visible: bool
    query: str
    selected_index: int
    entries: tuple[RenderEntry, ...]
    total_count: int
    filtered_count: int
    scroll_offset: int = 0
    max_visible: int = DEFAULT_MAX_VISIBLE_ITEMS

    @property
    def window(self) -> tuple[RenderEntry, ...]:
        """The rows currently scrolled into view."""
        return self.entries[self.scroll_offset : self.scroll_offset + self.max_visible]

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form for hosts that exchange render state as JSON."""
        return {
            "visible": self.visible,
            "query": self.query,
            "selectedIndex": self.selected_index,
            "entries": [{"title": e.title, "category": e.category} for e in self.entries],
            "totalCount": self.total_count,
            "filteredCount": self.filtered_count,
            "scrollOffset": self.scroll_offset,
        }


@dataclass(frozen=True)
class ExecutionOutcome:
    """Result of a confirm that reached the executor."""

    entry: ActionEntry
    action_key: str
    succeeded: bool
    error: Exception | None = None
    result: object = None


class PaletteController:
    """
    Drives a palette session.

    States are Closed and Open. While Open the controller tracks the query,
    the selected index and the filtered, ranked entries. Confirm hands the
    selected entry's action key to the executor and always closes.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        *,
        environment: EnvironmentProvider | None = None,
        executor: Executor | None = None,
        matcher: FuzzyMatcher | None = None,
        on_render: Callable[[RenderState], None] | None = None,
        on_closed: Callable[[], None] | None = None,
        on_error: Callable[[str], None] | None = None,
        max_visible: int = DEFAULT_MAX_VISIBLE_ITEMS,
    ):
        self._registry = registry
        self._environment = environment
        self._executor = executor
        self._matcher = matcher or FuzzyMatcher()
        self.on_render = on_render
        self.on_closed = on_closed
        self.on_error = on_error
        self.max_visible = max(1, max_visible)
        self._snapshot: EnvironmentSnapshot | None = None
        self._state = PaletteState(
            filtered_entries=registry.get_all(),
            total_count=registry.count(),
        )

    # ------------------------------------------------------------------ queries

    @property
    def state(self) -> PaletteState:
        """Current state. Treat as read-only; use the event methods to change it."""
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.visible

    @property
    def snapshot(self) -> EnvironmentSnapshot | None:
        """The environment captured when the palette was opened."""
        return self._snapshot

    @property
    def selected_entry(self) -> ActionEntry | None:
        entries = self._state.filtered_entries
        if not entries:
            return None
        return entries[self._state.selected_index]

    def render_state(self) -> RenderState:
        state = self._state
        return RenderState(
            visible=state.visible,
            query=state.query,
            selected_index=state.selected_index,
            entries=tuple(RenderEntry(e.title, e.category) for e in state.filtered_entries),
            total_count=state.total_count,
            filtered_count=state.filtered_count,
            scroll_offset=max(0, state.selected_index - self.max_visible + 1),
            max_visible=self.max_visible,
        )

    # ------------------------------------------------------------------ lifecycle

    def open(self) -> None:
        """Open a fresh session with a newly captured environment."""
        self._state.visible = True
        self._state.query = ""
        self._state.selected_index = 0
        self._snapshot = self._fetch_snapshot()
        self._state.filtered_entries = filter_by_context(self._registry.get_all(), self._snapshot)
        self._state.total_count = self._registry.count()
        logger.info("Palette opened")
        self._render()

    def close(self) -> None:
        """Close the palette and reset the session. Safe to call when closed."""
        self._reset()
        logger.info("Palette closed")
        if self.on_closed:
            self.on_closed()
        self._render()

    def cancel(self) -> None:
        """Explicit escape; same as close."""
        self.close()

    def toggle(self) -> None:
        if self._state.visible:
            self.close()
        else:
            self.open()

    def refresh_context(self) -> None:
        """Re-capture the environment while open and re-derive the results."""
        if not self._state.visible:
            return
        self._snapshot = self._fetch_snapshot()
        self._requery()

    # ------------------------------------------------------------------ editing

    def set_query(self, text: str) -> None:
        """Replace the whole query (hosts that deliver finished text)."""
        if not self._state.visible:
            return
        self._state.query = text
        self._requery()

    def append_char(self, char: str) -> None:
        """Append typed text; non-printable input is ignored."""
        if not self._state.visible or not char or not char.isprintable():
            return
        self._state.query += char
        self._requery()

    def backspace(self) -> None:
        if not self._state.visible or not self._state.query:
            return
        self._state.query = self._state.query[:-1]
        self._requery()

    # ------------------------------------------------------------------ selection

    def navigate(self, delta: int) -> None:
        """Move the selection, holding at either end of the list."""
        if not self._state.visible:
            return
        entries = self._state.filtered_entries
        if not entries:
            self._state.selected_index = 0
        else:
            new_index = self._state.selected_index + delta
            self._state.selected_index = max(0, min(new_index, len(entries) - 1))
        self._render()

    def move_selection(self, delta: int) -> None:
        self.navigate(delta)

    def confirm(self) -> ExecutionOutcome | None:
        """
        Execute the selected entry and close.

        Returns:
            The execution outcome, or None when nothing was executed (palette
            closed, or no entries matched). Executor failures are logged and
            reported through ``on_error``; the palette closes either way.
        """
        if not self._state.visible:
            return None

        entry = self.selected_entry
        if entry is None:
            logger.info("No command selected")
            self.close()
            return None

        logger.info(f"Executing: {entry.title}")
        try:
            outcome = self._execute(entry)
        finally:
            self.close()
        return outcome

    def handle_key(self, key: str) -> bool:
        """Route a named navigation key. Returns True if the key was used."""
        if not self._state.visible:
            return False
        if key in ("up", "ctrl+p"):
            self.navigate(-1)
        elif key in ("down", "ctrl+n"):
            self.navigate(1)
        elif key == "enter":
            self.confirm()
        elif key == "escape":
            self.cancel()
        elif key == "backspace":
            self.backspace()
        else:
            return False
        return True

    # ------------------------------------------------------------------ internals

    def _execute(self, entry: ActionEntry) -> ExecutionOutcome:
        if self._executor is None:
            error: Exception = ExecutionError("No executor configured", action_key=entry.action_key)
            self._report_failure(entry, error)
            return ExecutionOutcome(entry, entry.action_key, succeeded=False, error=error)

        try:
            result = self._executor(entry.action_key)
        except Exception as e:
            self._report_failure(entry, e)
            return ExecutionOutcome(entry, entry.action_key, succeeded=False, error=e)

        logger.info(f"Completed: {entry.title}")
        return ExecutionOutcome(entry, entry.action_key, succeeded=True, result=result)

    def _report_failure(self, entry: ActionEntry, error: Exception) -> None:
        message = f"Error executing {entry.title}: {error}"
        logger.error(message)
        if self.on_error:
            self.on_error(message)

    def _fetch_snapshot(self) -> EnvironmentSnapshot | None:
        if self._environment is None:
            return None
        try:
            snapshot = self._environment()
        except Exception as e:
            logger.warning(f"Error getting context, showing all commands: {e}")
            return None
        if snapshot is None:
            logger.warning("No environment snapshot available, showing all commands")
        return snapshot

    def _requery(self) -> None:
        available = filter_by_context(self._registry.get_all(), self._snapshot)
        results = self._matcher.search(self._state.query, available)
        self._state.filtered_entries = [r.entry for r in results]
        self._state.total_count = self._registry.count()
        self._clamp_selection()
        self._render()

    def _clamp_selection(self) -> None:
        last = len(self._state.filtered_entries) - 1
        self._state.selected_index = max(0, min(self._state.selected_index, last))

    def _reset(self) -> None:
        self._state.visible = False
        self._state.query = ""
        self._state.selected_index = 0
        self._state.filtered_entries = self._registry.get_all()
        self._state.total_count = self._registry.count()
        self._snapshot = None

    def _render(self) -> None:
        if self.on_render:
            self.on_render(self.render_state())
