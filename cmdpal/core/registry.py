"""
Command registry for the palette.

Holds every catalog entry, indexed by id and by category. The registry is
filled once at startup and only read afterwards.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from cmdpal.exceptions import ValidationError

from .models import ActionEntry

logger = logging.getLogger(__name__)


@dataclass
class BatchReport:
    """Outcome of loading one catalog batch."""

    category: str
    loaded: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class CommandRegistry:
    """Registry of available actions for the palette."""

    def __init__(self) -> None:
        self._commands: dict[str, ActionEntry] = {}
        self._categories: dict[str, list[ActionEntry]] = {}

    def register(self, entry: ActionEntry) -> None:
        """Register an entry.

        Raises:
            ValidationError: If id, title or action_key is empty, or the id
                is already registered. The existing entry is left untouched.
        """
        for field_name in ("id", "title", "action_key"):
            if not getattr(entry, field_name):
                raise ValidationError(
                    f"Invalid command: missing {field_name}",
                    entry_id=entry.id or None,
                    field=field_name,
                )

        if entry.id in self._commands:
            raise ValidationError(f"Duplicate command id: {entry.id}", entry_id=entry.id)

        self._commands[entry.id] = entry
        self._categories.setdefault(entry.category, []).append(entry)
        logger.debug(f"Registered command: {entry.id}")

    def load_batch(
        self, category: str, entries: Iterable[ActionEntry | Mapping[str, Any]]
    ) -> BatchReport:
        """Register a batch of entries in order.

        Loading is not atomic: a bad entry is recorded in the report and the
        rest of the batch still loads.
        """
        report = BatchReport(category=category)

        for position, raw in enumerate(entries):
            try:
                entry = raw if isinstance(raw, ActionEntry) else ActionEntry.from_dict(raw)
                self.register(entry)
            except ValidationError as e:
                report.errors.append(f"#{position}: {e}")
                continue
            report.loaded.append(entry.id)

        logger.info(f"Loaded {len(report.loaded)} commands in category: {category}")
        for error in report.errors:
            logger.error(f"Rejected command in category {category}: {error}")

        return report

    def get_all(self) -> list[ActionEntry]:
        """Get all entries in registration order."""
        return list(self._commands.values())

    def get_by_category(self, category: str) -> list[ActionEntry]:
        """Get the entries of a category, or an empty list if it is unknown."""
        return list(self._categories.get(category, ()))

    def get_by_id(self, entry_id: str) -> ActionEntry | None:
        """Get an entry by id."""
        return self._commands.get(entry_id)

    def get_categories(self) -> list[str]:
        """Get category names in the order they first appeared."""
        return list(self._categories)

    def count(self) -> int:
        return len(self._commands)

    def clear(self) -> None:
        """Drop every entry. Only used when re-initializing the catalog."""
        self._commands.clear()
        self._categories.clear()

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._commands

    def __iter__(self) -> Iterator[ActionEntry]:
        return iter(self.get_all())
