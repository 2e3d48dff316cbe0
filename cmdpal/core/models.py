"""
Data model for the palette core.

Entries, environment snapshots and search results are immutable; only the
controller's PaletteState changes over time.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cmdpal.config.constants import UNCATEGORIZED
from cmdpal.exceptions import ValidationError


class ViewMode(Enum):
    """Which main view the host is showing."""

    SESSION = "session"
    ARRANGEMENT = "arrangement"


class Requirement(str, Enum):
    """Named preconditions an action can declare."""

    SELECTED_TRACK = "selected_track"
    SELECTED_DEVICE = "selected_device"
    SELECTED_CLIP = "selected_clip"
    PLAYING = "playing"
    STOPPED = "stopped"
    SESSION_VIEW = "session_view"
    ARRANGEMENT_VIEW = "arrangement_view"

    @classmethod
    def parse(cls, name: str) -> "Requirement":
        """Resolve a requirement from snake_case or camelCase catalog spelling."""
        normalized = re.sub(r"(?<!^)(?=[A-Z])", "_", name.strip()).lower()
        try:
            return cls(normalized)
        except ValueError:
            raise ValidationError(f"Unknown requirement: {name}", field="requires") from None


def parse_requirements(raw: Any) -> frozenset[Requirement]:
    """Parse the ``requires`` field of catalog data.

    Accepts None, a single name, a list of names, or a mapping of
    name -> bool where only truthy names count.

    Raises:
        ValidationError: If the value has any other shape.
    """
    if raw is None:
        return frozenset()
    if isinstance(raw, Mapping):
        names: Iterable = [name for name, wanted in raw.items() if wanted]
    elif isinstance(raw, str):
        names = [raw]
    elif isinstance(raw, (list, tuple, set, frozenset)):
        names = raw
    else:
        raise ValidationError(
            f"requires must be a name, list or mapping, got {type(raw).__name__}",
            field="requires",
        )

    requirements = set()
    for item in names:
        if not isinstance(item, str):
            raise ValidationError(
                f"Requirement names must be strings, got {type(item).__name__}",
                field="requires",
            )
        requirements.add(item if isinstance(item, Requirement) else Requirement.parse(item))
    return frozenset(requirements)


def parse_keywords(raw: Any) -> tuple[str, ...]:
    """Parse the ``keywords`` field: None, one string, or a list of strings."""
    if raw is None or raw == "":
        return ()
    if isinstance(raw, str):
        return (raw,)
    if not isinstance(raw, (list, tuple)):
        raise ValidationError(
            f"keywords must be a string or list, got {type(raw).__name__}", field="keywords"
        )
    for keyword in raw:
        if not isinstance(keyword, str):
            raise ValidationError(
                f"Keywords must be strings, got {type(keyword).__name__}", field="keywords"
            )
    return tuple(raw)


@dataclass(frozen=True)
class ActionEntry:
    """An invokable action as described by the catalog."""

    id: str
    title: str
    action_key: str
    category: str = UNCATEGORIZED
    keywords: tuple[str, ...] = ()
    description: str = ""
    requires: frozenset[Requirement] = field(default_factory=frozenset)
    shortcut: str | None = None

    def __post_init__(self) -> None:
        if not self.category:
            object.__setattr__(self, "category", UNCATEGORIZED)
        if not isinstance(self.keywords, tuple):
            object.__setattr__(self, "keywords", tuple(self.keywords))
        if not isinstance(self.requires, frozenset):
            object.__setattr__(self, "requires", parse_requirements(self.requires))
        if self.description is None:
            object.__setattr__(self, "description", "")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ActionEntry":
        """Build an entry from catalog data.

        ``action`` is accepted as an alias for ``action_key``. Missing
        required fields become empty strings so that ``register`` reports
        them with a proper ValidationError.
        """
        if not isinstance(data, Mapping):
            raise ValidationError(f"Catalog entry must be a mapping, got {type(data).__name__}")

        return cls(
            id=str(data.get("id") or ""),
            title=str(data.get("title") or ""),
            action_key=str(data.get("action_key") or data.get("action") or ""),
            category=str(data.get("category") or UNCATEGORIZED),
            keywords=parse_keywords(data.get("keywords")),
            description=str(data.get("description") or ""),
            requires=parse_requirements(data.get("requires")),
            shortcut=data.get("shortcut"),
        )


@dataclass(frozen=True)
class EnvironmentSnapshot:
    """Point-in-time facts about the host, taken fresh on every open."""

    has_selected_track: bool = False
    has_selected_device: bool = False
    has_selected_clip: bool = False
    is_playing: bool = False
    view_mode: ViewMode = ViewMode.SESSION


@dataclass(frozen=True)
class SearchResult:
    """An entry paired with its fuzzy score for one search."""

    entry: ActionEntry
    score: int


@dataclass(frozen=True)
class HighlightSegment:
    """A run of text that was (or was not) consumed by the fuzzy walk."""

    text: str
    matched: bool
