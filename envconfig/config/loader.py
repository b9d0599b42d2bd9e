"""Settings loader - defaults, YAML file, environment variables, overrides."""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Mapping, Optional

import yaml

from envconfig.config.exceptions import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)
from envconfig.config.merger import deep_merge
from envconfig.secrets import available_backends
from envconfig.utils.decorators import log_call
from envconfig.utils.logging import LOG_FORMATS, LOG_LEVELS, get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = "envconfig.yaml"
ENV_PREFIX = "ENVCONFIG_"

# Settings field -> (section, key) in the YAML file
FILE_KEYS = {
    "backend": ("secrets", "backend"),
    "profile": ("secrets", "profile"),
    "region": ("secrets", "region"),
    "secrets_file": ("secrets", "file"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "log_file": ("logging", "file"),
    "metrics_file": ("metrics", "file"),
}


@dataclass(frozen=True)
class Settings:
    """Effective settings for one run."""

    backend: str = "aws"
    profile: Optional[str] = None
    region: str = ""
    secrets_file: Optional[str] = None
    log_level: str = "INFO"
    log_format: str = "standard"
    log_file: Optional[str] = None
    metrics_file: Optional[str] = None

    def backend_options(self) -> dict:
        """Constructor arguments for the selected secret backend."""
        if self.backend == "file":
            return {"path": self.secrets_file}
        return {}


class ConfigLoader:
    """
    Builds Settings from several sources.

    Load order (later wins):
        1. Built-in defaults
        2. envconfig.yaml (optional unless a path is given explicitly)
        3. environments.{environment} block of that file
        4. ENVCONFIG_* environment variables
        5. Explicit overrides (command-line flags)

    Usage:
        loader = ConfigLoader()
        settings = loader.load(environment="prod", overrides={"region": "us-east-1"})
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.required = config_path is not None
        self.config_path = Path(config_path) if config_path else Path(DEFAULT_CONFIG_FILE)
        self.environ = os.environ if environ is None else environ

    def _load_yaml(self, path: Path) -> dict:
        """Load and parse a YAML file."""
        if not path.exists():
            raise ConfigNotFoundError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                content = yaml.safe_load(f) or {}
                logger.debug(f"Loaded config: {path}")
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(content, dict):
            raise ConfigParseError(f"Config file {path} must contain a mapping")
        return content

    def _load_file(self, environment: Optional[str]) -> dict:
        if not self.required and not self.config_path.exists():
            return {}

        content = self._load_yaml(self.config_path)
        logger.info(f"Loaded settings file: {self.config_path}")

        environments = content.pop("environments", None) or {}
        if environment:
            if environment not in environments:
                raise ConfigValidationError(
                    f"Environment '{environment}' not defined in {self.config_path}"
                )
            content = deep_merge(content, environments[environment] or {})
            logger.info(f"Merged environment settings: {environment}")
        return content

    def _from_file(self, content: dict) -> dict:
        values = {}
        for name, (section, key) in FILE_KEYS.items():
            section_values = content.get(section) or {}
            if not isinstance(section_values, dict):
                raise ConfigValidationError(f"Section '{section}' must be a mapping")
            if section_values.get(key) is not None:
                values[name] = str(section_values[key])
        return values

    def _from_environ(self) -> dict:
        values = {}
        for f in fields(Settings):
            value = self.environ.get(f"{ENV_PREFIX}{f.name.upper()}")
            if value:
                values[f.name] = value
        return values

    @log_call
    def load(
        self, environment: Optional[str] = None, overrides: Optional[dict] = None
    ) -> Settings:
        """
        Load complete settings.

        Args:
            environment: Optional environment block to merge (e.g., "prod")
            overrides: Values that win over every other source; None values
                are ignored

        Returns:
            Validated Settings
        """
        settings = Settings()
        settings = replace(settings, **self._from_file(self._load_file(environment)))
        settings = replace(settings, **self._from_environ())
        settings = replace(
            settings, **{k: v for k, v in (overrides or {}).items() if v is not None}
        )

        validate(settings)
        return settings


def validate(settings: Settings) -> None:
    """
    Raises:
        ConfigValidationError: If a setting has an unusable value
    """
    if settings.log_level.upper() not in LOG_LEVELS:
        raise ConfigValidationError(
            f"Invalid log level '{settings.log_level}'. "
            f"Choose from: {', '.join(LOG_LEVELS)}"
        )
    if settings.log_format not in LOG_FORMATS:
        raise ConfigValidationError(
            f"Invalid log format '{settings.log_format}'. "
            f"Choose from: {', '.join(LOG_FORMATS)}"
        )
    if settings.backend not in available_backends():
        raise ConfigValidationError(
            f"Unknown backend: '{settings.backend}'. "
            f"Available: {', '.join(available_backends())}"
        )
    if settings.backend == "file" and not settings.secrets_file:
        raise ConfigValidationError("The 'file' backend requires a secrets file")
