"""Tests for cmdpal configuration and environment variables."""

from pathlib import Path

import pytest

from cmdpal.config import settings
from cmdpal.config.constants import DEFAULT_MAX_VISIBLE_ITEMS, ENV_VAR_DEFINITIONS


class TestPaths:
    """Tests for config, catalog and log paths."""

    def test_config_dir_is_created(self, isolated_config) -> None:
        assert not isolated_config.exists()
        assert settings.get_config_dir() == isolated_config
        assert isolated_config.is_dir()

    def test_default_catalog_path(self, isolated_config) -> None:
        assert settings.get_catalog_path() == isolated_config / "catalog.yaml"

    def test_catalog_path_from_env(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("CMDPAL_CATALOG", str(tmp_path / "mine.yaml"))
        assert settings.get_catalog_path() == tmp_path / "mine.yaml"

    def test_catalog_path_expands_user(self, monkeypatch) -> None:
        monkeypatch.setenv("CMDPAL_CATALOG", "~/palette.yaml")
        assert settings.get_catalog_path() == Path.home() / "palette.yaml"

    def test_log_path(self, isolated_config) -> None:
        assert settings.get_log_path() == isolated_config / "cmdpal.log"


class TestMaxVisible:
    """Tests for CMDPAL_MAX_VISIBLE."""

    def test_default(self) -> None:
        assert settings.get_max_visible() == DEFAULT_MAX_VISIBLE_ITEMS

    def test_override(self, monkeypatch) -> None:
        monkeypatch.setenv("CMDPAL_MAX_VISIBLE", "5")
        assert settings.get_max_visible() == 5

    @pytest.mark.parametrize("value", ["abc", "0", "-3", ""])
    def test_bad_values_fall_back(self, monkeypatch, value) -> None:
        monkeypatch.setenv("CMDPAL_MAX_VISIBLE", value)
        assert settings.get_max_visible() == DEFAULT_MAX_VISIBLE_ITEMS


class TestBuiltinToggle:
    """Tests for CMDPAL_BUILTIN_CATALOG."""

    def test_enabled_by_default(self) -> None:
        assert settings.use_builtin_catalog() is True

    @pytest.mark.parametrize("value,expected", [("false", False), ("0", False), ("TRUE", True), ("1", True)])
    def test_values(self, monkeypatch, value, expected) -> None:
        monkeypatch.setenv("CMDPAL_BUILTIN_CATALOG", value)
        assert settings.use_builtin_catalog() is expected


class TestEnvValidation:
    """Tests for environment variable validation."""

    def test_all_valid_when_unset(self) -> None:
        assert settings.validate_all_env_vars() == []

    def test_invalid_choice(self, monkeypatch) -> None:
        monkeypatch.setenv("CMDPAL_BUILTIN_CATALOG", "maybe")
        errors = settings.validate_all_env_vars()
        assert len(errors) == 1
        assert "CMDPAL_BUILTIN_CATALOG" in errors[0]

    def test_unknown_variable_is_valid(self) -> None:
        assert settings.validate_env_var("SOMETHING_ELSE", "x") == (True, None)

    def test_get_env_var_validates(self, monkeypatch) -> None:
        monkeypatch.setenv("CMDPAL_BUILTIN_CATALOG", "maybe")
        with pytest.raises(ValueError):
            settings.get_env_var("CMDPAL_BUILTIN_CATALOG")
        assert settings.get_env_var("CMDPAL_BUILTIN_CATALOG", validate=False) == "maybe"

    def test_get_env_var_default(self) -> None:
        assert settings.get_env_var("CMDPAL_MAX_VISIBLE") == str(DEFAULT_MAX_VISIBLE_ITEMS)

    def test_env_info(self, monkeypatch) -> None:
        monkeypatch.setenv("CMDPAL_MAX_VISIBLE", "7")
        info = settings.get_env_info()
        assert set(info) == set(ENV_VAR_DEFINITIONS)
        assert info["CMDPAL_MAX_VISIBLE"]["value"] == "7"
        assert info["CMDPAL_MAX_VISIBLE"]["is_set"] is True
        assert info["CMDPAL_CATALOG"]["is_set"] is False
