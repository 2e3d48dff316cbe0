"""Configuration for cmdpal: constants and environment-driven settings."""

from .constants import (
    CMDPAL_CONFIG_DIR,
    DEFAULT_MAX_VISIBLE_ITEMS,
    DEFAULT_WEIGHTS,
    UNCATEGORIZED,
    ScoringWeights,
)
from .settings import (
    get_catalog_path,
    get_config_dir,
    get_log_path,
    get_max_visible,
    use_builtin_catalog,
    validate_all_env_vars,
)

__all__ = [
    "CMDPAL_CONFIG_DIR",
    "DEFAULT_MAX_VISIBLE_ITEMS",
    "DEFAULT_WEIGHTS",
    "UNCATEGORIZED",
    "ScoringWeights",
    "get_catalog_path",
    "get_config_dir",
    "get_log_path",
    "get_max_visible",
    "use_builtin_catalog",
    "validate_all_env_vars",
]
