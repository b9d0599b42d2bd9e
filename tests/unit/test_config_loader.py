"""Tests for settings loader."""

import pytest

from envconfig.config.exceptions import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)
from envconfig.config.loader import ConfigLoader, Settings
from envconfig.config.merger import deep_merge


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_defaults_without_file(self, tmp_path):
        """Should fall back to defaults when no settings file exists."""
        # Arrange
        loader = ConfigLoader(environ={})
        loader.config_path = tmp_path / "envconfig.yaml"

        # Act
        settings = loader.load()

        # Assert
        assert settings == Settings()
        assert settings.backend == "aws"
        assert settings.profile is None

    def test_load_settings_file(self, tmp_path):
        """Should read values from the YAML sections."""
        # Arrange
        config_file = tmp_path / "envconfig.yaml"
        config_file.write_text(
            """
secrets:
  backend: aws
  profile: deploy
  region: us-east-1
logging:
  level: DEBUG
  format: json
  file: /tmp/envconfig.log
metrics:
  file: /tmp/envconfig.prom
"""
        )
        loader = ConfigLoader(config_path=config_file, environ={})

        # Act
        settings = loader.load()

        # Assert
        assert settings.profile == "deploy"
        assert settings.region == "us-east-1"
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.log_file == "/tmp/envconfig.log"
        assert settings.metrics_file == "/tmp/envconfig.prom"

    def test_environment_overrides_base(self, tmp_path):
        """Environment block should override base settings."""
        # Arrange
        config_file = tmp_path / "envconfig.yaml"
        config_file.write_text(
            """
secrets:
  profile: deploy
  region: us-east-1
environments:
  prod:
    secrets:
      region: sa-east-1
"""
        )
        loader = ConfigLoader(config_path=config_file, environ={})

        # Act
        settings = loader.load(environment="prod")

        # Assert
        assert settings.region == "sa-east-1"  # overridden
        assert settings.profile == "deploy"  # preserved from base

    def test_unknown_environment_raises_error(self, tmp_path):
        """Should raise error for an environment the file doesn't define."""
        config_file = tmp_path / "envconfig.yaml"
        config_file.write_text("secrets: {}\n")
        loader = ConfigLoader(config_path=config_file, environ={})

        with pytest.raises(ConfigValidationError) as exc_info:
            loader.load(environment="staging")

        assert "staging" in str(exc_info.value)

    def test_environment_variables_override_file(self, tmp_path):
        """ENVCONFIG_* variables should win over the settings file."""
        # Arrange
        config_file = tmp_path / "envconfig.yaml"
        config_file.write_text("secrets:\n  region: us-east-1\n  profile: deploy\n")
        loader = ConfigLoader(
            config_path=config_file,
            environ={"ENVCONFIG_REGION": "eu-west-1", "ENVCONFIG_PROFILE": ""},
        )

        # Act
        settings = loader.load()

        # Assert
        assert settings.region == "eu-west-1"
        assert settings.profile == "deploy"  # empty variable ignored

    def test_overrides_win(self, tmp_path):
        """Explicit overrides should win over everything; None is ignored."""
        # Arrange
        loader = ConfigLoader(environ={"ENVCONFIG_REGION": "eu-west-1"})
        loader.config_path = tmp_path / "envconfig.yaml"

        # Act
        settings = loader.load(overrides={"region": "ap-south-1", "profile": None})

        # Assert
        assert settings.region == "ap-south-1"
        assert settings.profile is None

    def test_missing_explicit_file_raises_error(self, tmp_path):
        """Should raise error if an explicitly given file is missing."""
        loader = ConfigLoader(config_path=tmp_path / "custom.yaml", environ={})

        with pytest.raises(ConfigNotFoundError) as exc_info:
            loader.load()

        assert "custom.yaml" in str(exc_info.value)

    def test_invalid_yaml_raises_error(self, tmp_path):
        """Should raise error on invalid YAML."""
        config_file = tmp_path / "envconfig.yaml"
        config_file.write_text("invalid: yaml: content: {{")
        loader = ConfigLoader(config_path=config_file, environ={})

        with pytest.raises(ConfigParseError):
            loader.load()

    def test_invalid_log_level(self, tmp_path):
        """Should reject unknown log levels."""
        loader = ConfigLoader(environ={"ENVCONFIG_LOG_LEVEL": "LOUD"})
        loader.config_path = tmp_path / "envconfig.yaml"

        with pytest.raises(ConfigValidationError):
            loader.load()

    def test_file_backend_requires_secrets_file(self, tmp_path):
        """The file backend can't be selected without a secrets file."""
        loader = ConfigLoader(environ={"ENVCONFIG_BACKEND": "file"})
        loader.config_path = tmp_path / "envconfig.yaml"

        with pytest.raises(ConfigValidationError) as exc_info:
            loader.load()

        assert "secrets file" in str(exc_info.value)

    def test_unknown_backend(self, tmp_path):
        """Should reject backends that aren't registered."""
        loader = ConfigLoader(environ={})
        loader.config_path = tmp_path / "envconfig.yaml"

        with pytest.raises(ConfigValidationError):
            loader.load(overrides={"backend": "vault"})

    def test_backend_options(self):
        """File backend options carry the secrets file path."""
        assert Settings(backend="file", secrets_file="s.json").backend_options() == {
            "path": "s.json"
        }
        assert Settings().backend_options() == {}


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested_override(self):
        base = {"secrets": {"backend": "aws", "region": "us-east-1"}}
        override = {"secrets": {"region": "sa-east-1"}}

        assert deep_merge(base, override) == {
            "secrets": {"backend": "aws", "region": "sa-east-1"}
        }

    def test_does_not_mutate_inputs(self):
        base = {"a": {"b": 1}}

        deep_merge(base, {"a": {"b": 2}})

        assert base == {"a": {"b": 1}}
