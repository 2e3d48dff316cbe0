"""Action catalogs: the built-in batches and the YAML user catalog."""

from .builtin import BUILTIN_BATCHES, load_builtin
from .loader import (
    build_registry,
    load_catalog,
    load_user_catalog,
    read_catalog,
    save_example_catalog,
)

__all__ = [
    "BUILTIN_BATCHES",
    "build_registry",
    "load_builtin",
    "load_catalog",
    "load_user_catalog",
    "read_catalog",
    "save_example_catalog",
]
