"""
Centralized constants for cmdpal.

Scoring weights, display limits and environment variable definitions live
here so the matcher, controller and CLI agree on them.
"""

from dataclasses import dataclass
from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

CMDPAL_CONFIG_DIR = Path.home() / ".config" / "cmdpal"
CATALOG_FILENAME = "catalog.yaml"
LOG_FILENAME = "cmdpal.log"

# =============================================================================
# CATALOG
# =============================================================================

UNCATEGORIZED = "Uncategorized"  # Category for entries that declare none

# =============================================================================
# FUZZY SCORING
# =============================================================================

EARLY_POSITION_LIMIT = 5  # Matches before this index get the early bonus
WORD_BOUNDARY_CHARS = frozenset(" _-")


@dataclass(frozen=True)
class ScoringWeights:
    """Bonuses added per matched character by the fuzzy matcher."""

    consecutive_bonus: int = 5  # Match directly follows the previous match
    word_boundary_bonus: int = 3  # Match starts a word
    early_position_bonus: int = 2  # Match within the first few characters
    keyword_bonus: int = 2  # Added for every keyword that matches
    title_multiplier: int = 2  # Title hits outrank everything else


DEFAULT_WEIGHTS = ScoringWeights()

# =============================================================================
# DISPLAY
# =============================================================================

DEFAULT_MAX_VISIBLE_ITEMS = 10  # Rows shown before the list scrolls
TITLE_TRUNCATE_LENGTH = 50
CATEGORY_TRUNCATE_LENGTH = 12

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS: dict[str, dict] = {
    "CMDPAL_CATALOG": {
        "description": "Path to a YAML catalog loaded after the built-in actions",
        "default": None,
        "valid_values": None,
    },
    "CMDPAL_MAX_VISIBLE": {
        "description": "Number of result rows visible before scrolling",
        "default": str(DEFAULT_MAX_VISIBLE_ITEMS),
        "valid_values": None,
    },
    "CMDPAL_BUILTIN_CATALOG": {
        "description": "Set to 'false' to skip the built-in actions",
        "default": "true",
        "valid_values": ["true", "false", "1", "0"],
    },
}
