"""Unit tests for config_template module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.app.runtime.config.config_template import (
    apply_environment_overrides,
    load_templated_yaml,
    substitute_env_vars,
)


class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_simple_env_var(self):
        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            assert substitute_env_vars("${TEST_VAR}") == "test_value"

    def test_substitute_env_var_in_text(self):
        with patch.dict(os.environ, {"HOST": "localhost", "PORT": "8080"}):
            text = "Server running at http://${HOST}:${PORT}/api"
            assert substitute_env_vars(text) == "Server running at http://localhost:8080/api"

    def test_default_used_when_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-sqlite:///./x.db}") == "sqlite:///./x.db"

    def test_default_ignored_when_set(self):
        with patch.dict(os.environ, {"PRESENT_VAR": "actual_value"}):
            assert substitute_env_vars("${PRESENT_VAR:-default_value}") == "actual_value"

    def test_required_env_var_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError, match="Required environment variable MISSING_VAR not set"
            ):
                substitute_env_vars("${MISSING_VAR}")

    def test_required_env_var_custom_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="set the database url"):
                substitute_env_vars("${DB_URL:?set the database url}")


class TestApplyEnvironmentOverrides:
    def test_prefixed_variables_override_plain_ones(self):
        with patch.dict(
            os.environ,
            {"PRODUCTION_DATABASE_URL": "postgresql://db/prod", "DATABASE_URL": "x"},
            clear=True,
        ):
            apply_environment_overrides("production")

            assert os.environ["DATABASE_URL"] == "postgresql://db/prod"


class TestLoadTemplatedYaml:
    def _write(self, tmp_path: Path, body: str) -> Path:
        path = tmp_path / "config.yaml"
        path.write_text(body)
        return path

    def test_loads_config_section(self, tmp_path: Path):
        path = self._write(
            tmp_path,
            "config:\n"
            "  database:\n"
            "    url: \"${TEST_DB_URL:-sqlite:///:memory:}\"\n"
            "  contacts:\n"
            "    phone_types: [mobile, home]\n",
        )

        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(path, env_mode="test")

        assert config.database.url == "sqlite:///:memory:"
        assert config.contacts.phone_types == ["mobile", "home"]
        assert config.app.environment == "test"
        # Untouched sections keep their defaults
        assert config.security.session_cookie_name == "user_session_id"

    def test_explicit_environment_wins(self, tmp_path: Path):
        path = self._write(tmp_path, "config:\n  app:\n    environment: production\n")

        config = load_templated_yaml(path, env_mode="development")

        assert config.app.environment == "production"

    def test_invalid_value_raises(self, tmp_path: Path):
        path = self._write(tmp_path, "config:\n  contacts:\n    phone_types: [fax]\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(path)

    def test_empty_file_raises(self, tmp_path: Path):
        path = self._write(tmp_path, "")

        with pytest.raises(ValueError):
            load_templated_yaml(path)

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_templated_yaml(tmp_path / "nope.yaml")

    def test_repository_config_file_loads(self):
        root = Path(__file__).resolve().parents[5]

        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(root / "config.yaml", env_mode="development")

        assert config.database.url == "sqlite:///./contacts.db"
        assert config.redis.enabled is False
        assert config.app.port == 8000

    def test_repository_config_accepts_colon_terminated_urls(self):
        root = Path(__file__).resolve().parents[5]

        with patch.dict(os.environ, {"DATABASE_URL": "sqlite:///:memory:"}, clear=True):
            config = load_templated_yaml(root / "config.yaml", env_mode="test")

        assert config.database.url == "sqlite:///:memory:"
