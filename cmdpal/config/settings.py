"""Configuration utilities for cmdpal."""

import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .constants import (
    CATALOG_FILENAME,
    CMDPAL_CONFIG_DIR,
    DEFAULT_MAX_VISIBLE_ITEMS,
    ENV_VAR_DEFINITIONS,
    LOG_FILENAME,
)


def get_config_dir() -> Path:
    """Get the cmdpal config directory, creating it if needed."""
    CMDPAL_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return CMDPAL_CONFIG_DIR


def get_catalog_path() -> Path:
    """Get the user catalog path, respecting the CMDPAL_CATALOG environment variable.

    The file is not required to exist; callers check before loading.
    """
    override = os.environ.get("CMDPAL_CATALOG")
    if override:
        return Path(override).expanduser()
    return CMDPAL_CONFIG_DIR / CATALOG_FILENAME


def get_log_path() -> Path:
    """Get the diagnostic log file path."""
    return get_config_dir() / LOG_FILENAME


def get_max_visible() -> int:
    """Number of palette rows visible before scrolling.

    Falls back to the default when CMDPAL_MAX_VISIBLE is unset, not a number,
    or less than one.
    """
    raw = os.environ.get("CMDPAL_MAX_VISIBLE")
    if raw is None:
        return DEFAULT_MAX_VISIBLE_ITEMS
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_MAX_VISIBLE_ITEMS
    return value if value > 0 else DEFAULT_MAX_VISIBLE_ITEMS


def use_builtin_catalog() -> bool:
    """Whether the built-in action batches should be loaded."""
    value = get_env_var("CMDPAL_BUILTIN_CATALOG", validate=False) or "true"
    return value.lower() in ("true", "1")


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS:
        return True, None

    valid_values = ENV_VAR_DEFINITIONS[name].get("valid_values")
    if value is None or valid_values is None:
        return True, None

    if value.lower() not in [v.lower() for v in valid_values]:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def validate_all_env_vars() -> List[str]:
    """Validate all cmdpal environment variables.

    Returns:
        List of error messages (empty if all valid).
    """
    errors = []
    for name in ENV_VAR_DEFINITIONS:
        is_valid, error = validate_env_var(name, os.environ.get(name))
        if not is_valid:
            errors.append(error)
    return errors


def get_env_var(name: str, validate: bool = True) -> Optional[str]:
    """Get an environment variable with optional validation.

    Raises:
        ValueError: If validate=True and the value is invalid.
    """
    value = os.environ.get(name)

    if validate and value is not None:
        is_valid, error = validate_env_var(name, value)
        if not is_valid:
            raise ValueError(error)

    if value is None and name in ENV_VAR_DEFINITIONS:
        return ENV_VAR_DEFINITIONS[name].get("default")

    return value


def get_env_info() -> Dict[str, Dict]:
    """Describe every cmdpal environment variable and its current value."""
    info = {}
    for name, definition in ENV_VAR_DEFINITIONS.items():
        value = os.environ.get(name)
        is_valid, _ = validate_env_var(name, value)
        info[name] = {
            "description": definition.get("description", ""),
            "value": value,
            "is_set": value is not None,
            "valid": is_valid,
            "default": definition.get("default"),
        }
    return info
