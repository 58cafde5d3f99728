"""Unit tests for config_template module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.config.config_template import (
    apply_environment_overrides,
    load_templated_yaml,
    substitute_env_vars,
)

REPO_CONFIG = Path(__file__).resolve().parents[3] / "config.yaml"


class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_simple_env_var(self):
        with patch.dict(os.environ, {"CATALOG_VAR": "value"}):
            assert substitute_env_vars("${CATALOG_VAR}") == "value"

    def test_substitute_env_var_in_text(self):
        with patch.dict(os.environ, {"HOST": "localhost", "PORT": "5432"}):
            text = "postgresql://${HOST}:${PORT}/catalog"
            assert substitute_env_vars(text) == "postgresql://localhost:5432/catalog"

    def test_substitute_env_var_with_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-fallback}") == "fallback"

    def test_default_ignored_when_set(self):
        with patch.dict(os.environ, {"SET_VAR": "actual"}):
            assert substitute_env_vars("${SET_VAR:-fallback}") == "actual"

    def test_required_var_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="MISSING_VAR not set"):
                substitute_env_vars("${MISSING_VAR}")

    def test_required_var_custom_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="DB_URL: set the database URL"):
                substitute_env_vars("${DB_URL:?set the database URL}")

    def test_text_without_placeholders_unchanged(self):
        assert substitute_env_vars("plain: value") == "plain: value"


class TestEnvironmentOverrides:
    """Test <ENV>_ prefixed variable promotion."""

    def test_prefixed_vars_promoted(self):
        with patch.dict(os.environ, {"PRODUCTION_DATABASE_URL": "sqlite:///prod.db"}, clear=True):
            applied = apply_environment_overrides("production")

            assert applied == ["DATABASE_URL"]
            assert os.environ["DATABASE_URL"] == "sqlite:///prod.db"

    def test_other_environments_ignored(self):
        with patch.dict(os.environ, {"PRODUCTION_DATABASE_URL": "sqlite:///prod.db"}, clear=True):
            assert apply_environment_overrides("development") == []
            assert "DATABASE_URL" not in os.environ


class TestLoadTemplatedYaml:
    """Test loading configuration files."""

    def test_load_minimal_config(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "config:\n"
            "  database:\n"
            "    url: ${DATABASE_URL:-sqlite://}\n"
            "  logging:\n"
            "    level: DEBUG\n"
        )

        with patch.dict(os.environ, {"APP_ENVIRONMENT": "test"}, clear=True):
            config = load_templated_yaml(config_file)

        assert isinstance(config, ConfigData)
        assert config.database.url == "sqlite://"
        assert config.logging.level == "DEBUG"
        assert config.app.environment == "development"  # Model default

    def test_environment_prefixed_override_applied(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("config:\n  database:\n    url: ${DATABASE_URL:-sqlite://}\n")

        env = {"APP_ENVIRONMENT": "test", "TEST_DATABASE_URL": "sqlite:///test.db"}
        with patch.dict(os.environ, env, clear=True):
            config = load_templated_yaml(config_file)

        assert config.database.url == "sqlite:///test.db"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_templated_yaml(tmp_path / "absent.yaml")

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(config_file)

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("config: [unclosed\n")

        with pytest.raises(ValueError, match="Error parsing YAML"):
            load_templated_yaml(config_file)

    def test_malformed_database_url(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("config:\n  database:\n    url: not a url\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(config_file)

    def test_missing_required_variable(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("config:\n  database:\n    url: ${CATALOG_REQUIRED_URL}\n")

        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="CATALOG_REQUIRED_URL"):
                load_templated_yaml(config_file)

    def test_repository_config_loads(self):
        """The shipped config.yaml is valid with no environment set."""
        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(REPO_CONFIG)

        assert config.app.environment == "development"
        assert config.database.url == "sqlite:///./catalog.db"
        assert config.database.pool_size == 20
