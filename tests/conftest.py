"""Shared pytest fixtures for cmdpal tests."""

import logging

import pytest

from cmdpal.catalog import load_builtin
from cmdpal.core.models import ActionEntry
from cmdpal.core.registry import CommandRegistry

CMDPAL_ENV_VARS = ("CMDPAL_CATALOG", "CMDPAL_MAX_VISIBLE", "CMDPAL_BUILTIN_CATALOG")


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep every test away from the real ~/.config/cmdpal and its env vars."""
    for name in CMDPAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config_dir = tmp_path / "config"
    monkeypatch.setattr("cmdpal.config.settings.CMDPAL_CONFIG_DIR", config_dir)
    yield config_dir
    logger = logging.getLogger("cmdpal")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


@pytest.fixture
def play_stop_registry():
    """The two-entry catalog used as the ranking regression baseline."""
    registry = CommandRegistry()
    registry.register(ActionEntry(id="a", title="Play", action_key="transport.play"))
    registry.register(ActionEntry(id="b", title="Stop", action_key="transport.stop"))
    return registry


@pytest.fixture
def builtin_registry():
    """A registry loaded with the built-in batches."""
    registry = CommandRegistry()
    load_builtin(registry)
    return registry
