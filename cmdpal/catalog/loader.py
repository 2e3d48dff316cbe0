"""
User catalog loader.

Loads extra action batches from a YAML file (~/.config/cmdpal/catalog.yaml
by default, or the path in CMDPAL_CATALOG).
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from cmdpal.config.settings import get_catalog_path, use_builtin_catalog
from cmdpal.core.registry import BatchReport, CommandRegistry
from cmdpal.exceptions import CatalogLoadError

from .builtin import load_builtin

logger = logging.getLogger(__name__)

# Example catalog content for new users
EXAMPLE_CATALOG = """# cmdpal catalog
#
# Each key under `categories` is a batch label; each item is one action.
#
# Fields:
#   id           unique identifier (required)
#   title        label shown in the palette (required)
#   action       action key handed to the host (required)
#   category     grouping label (defaults to "Uncategorized")
#   keywords     extra words to match against
#   description  secondary match text
#   requires     preconditions: selected_track, selected_device,
#                selected_clip, playing, stopped, session_view,
#                arrangement_view
#
# Example:
# categories:
#   Mixing:
#     - id: mix.resetVolume
#       title: Reset Track Volume
#       category: Track
#       action: track.resetVolume
#       keywords: [fader, gain, zero]
#       requires: [selected_track]

categories: {}
"""


def read_catalog(path: Path) -> dict[str, list[dict[str, Any]]]:
    """
    Parse a catalog file into ``{batch label: [entry data, ...]}``.

    Raises:
        CatalogLoadError: If the file cannot be read, is not valid YAML, or
            does not have the expected shape.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise CatalogLoadError(f"Cannot read catalog: {e}", path=str(path)) from e
    except yaml.YAMLError as e:
        raise CatalogLoadError(f"Invalid YAML: {e}", path=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise CatalogLoadError("Catalog must be a mapping", path=str(path))

    categories = data.get("categories", {}) or {}
    if not isinstance(categories, dict):
        raise CatalogLoadError("'categories' must be a mapping of label -> list", path=str(path))

    batches: dict[str, list[dict[str, Any]]] = {}
    for label, entries in categories.items():
        if not isinstance(entries, list):
            raise CatalogLoadError(
                f"Expected a list for category {label}", path=str(path), category=str(label)
            )
        batches[str(label)] = entries
    return batches


def load_catalog(registry: CommandRegistry, path: Path) -> list[BatchReport]:
    """Load every batch from ``path`` into ``registry``."""
    batches = read_catalog(path)
    reports = [registry.load_batch(label, entries) for label, entries in batches.items()]
    logger.info(f"Loaded catalog {path}: {sum(len(r.loaded) for r in reports)} commands")
    return reports


def load_user_catalog(registry: CommandRegistry, path: Path | None = None) -> list[BatchReport]:
    """Load the user catalog if it exists; a missing file is not an error."""
    path = path or get_catalog_path()
    if not path.exists():
        logger.debug(f"No user catalog at {path}")
        return []
    return load_catalog(registry, path)


def save_example_catalog(path: Path | None = None) -> bool:
    """
    Save an example catalog if none exists.

    Returns:
        True if the file was created, False if it already exists
    """
    path = path or get_catalog_path()
    if path.exists():
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(EXAMPLE_CATALOG, encoding="utf-8")
    logger.info(f"Created example catalog at {path}")
    return True


def build_registry(
    catalog_path: Path | None = None, *, include_builtin: bool | None = None
) -> tuple[CommandRegistry, list[BatchReport]]:
    """
    Build the startup registry: built-in batches first, then the user catalog.

    Raises:
        CatalogLoadError: If the user catalog exists but cannot be parsed.
    """
    if include_builtin is None:
        include_builtin = use_builtin_catalog()

    registry = CommandRegistry()
    reports: list[BatchReport] = []
    if include_builtin:
        reports.extend(load_builtin(registry))
    reports.extend(load_user_catalog(registry, catalog_path))
    return registry, reports
