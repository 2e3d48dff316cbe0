"""
Palette core - registry, fuzzy matcher, context filter and controller.

Provides:
- CommandRegistry: Catalog of available actions
- FuzzyMatcher: Subsequence scoring and ranking
- filter_by_context: Hide actions whose preconditions are unmet
- PaletteController: Open/query/select/confirm state machine
- ActionDispatcher: Action key -> handler lookup table
"""

from .context import filter_by_context
from .controller import ExecutionOutcome, PaletteController, PaletteState, RenderEntry, RenderState
from .dispatcher import ActionDispatcher
from .fuzzy import FuzzyMatcher
from .models import (
    ActionEntry,
    EnvironmentSnapshot,
    HighlightSegment,
    Requirement,
    SearchResult,
    ViewMode,
)
from .registry import BatchReport, CommandRegistry

__all__ = [
    "ActionDispatcher",
    "ActionEntry",
    "BatchReport",
    "CommandRegistry",
    "EnvironmentSnapshot",
    "ExecutionOutcome",
    "FuzzyMatcher",
    "HighlightSegment",
    "PaletteController",
    "PaletteState",
    "RenderEntry",
    "RenderState",
    "Requirement",
    "SearchResult",
    "ViewMode",
    "filter_by_context",
]
