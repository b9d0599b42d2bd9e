"""File-based secret backend."""

import json
from pathlib import Path
from typing import Any, Optional

from envconfig.secrets.base import SecretPayload, SecretProvider
from envconfig.secrets.exceptions import SecretBackendError, SecretNotFoundError
from envconfig.secrets.registry import register_backend
from envconfig.utils.logging import get_logger

logger = get_logger(__name__)


@register_backend("file")
class FileSecretBackend(SecretProvider):
    """
    Reads secrets from a JSON file, for local development and CI.

    Keys are secret identifiers. Object values are handed out as JSON text so
    that sub-key placeholders work the same way as with Secrets Manager.

    File format:
        {
            "prod/db": {"username": "app", "password": "secret123"},
            "prod/api-key": "abc123"
        }

    Profile and region are ignored.
    """

    def __init__(self, path: str):
        """
        Args:
            path: Path to JSON secrets file
        """
        self.file_path = Path(path)

    def establish_session(self, profile: Optional[str], region: Optional[str]) -> dict:
        """
        Load secrets from file.

        Raises:
            SecretBackendError: If file not found or invalid JSON
        """
        if not self.file_path.exists():
            raise SecretBackendError(f"Secret file not found: {self.file_path}")

        try:
            with open(self.file_path, encoding="utf-8") as f:
                secrets = json.load(f)
        except json.JSONDecodeError as e:
            raise SecretBackendError(f"Invalid JSON in {self.file_path}: {e}") from e

        if not isinstance(secrets, dict):
            raise SecretBackendError(
                f"Secret file {self.file_path} must contain a JSON object"
            )

        logger.info(f"Loaded {len(secrets)} secrets from {self.file_path}")
        return secrets

    def credentials_are_usable(self, session: Any) -> bool:
        """A loaded file needs no credentials."""
        return True

    def new_service_handle(self, session: Any) -> Any:
        return session

    def fetch_secret_value(self, service: Any, identifier: str) -> SecretPayload:
        if identifier not in service:
            raise SecretNotFoundError(
                f"Secret '{identifier}' not found in {self.file_path}"
            )

        value = service[identifier]
        if value is None:
            return SecretPayload()
        if isinstance(value, str):
            return SecretPayload(text=value)
        # Objects, lists, numbers and booleans are handed out as JSON text
        return SecretPayload(text=json.dumps(value))
