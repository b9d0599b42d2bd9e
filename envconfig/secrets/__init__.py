"""Secrets management module."""

# Import backends to trigger registration
from envconfig.secrets import aws_backend, file_backend  # noqa: F401

# Public API
from envconfig.secrets.base import SecretPayload, SecretProvider
from envconfig.secrets.cache import CacheEntry, CacheTable
from envconfig.secrets.client import SecretsClient
from envconfig.secrets.exceptions import (
    InvalidIdentifierError,
    SecretBackendError,
    SecretError,
    SecretFetchError,
    SecretNotFoundError,
    SecretNotTextError,
    ServiceError,
    SessionError,
    SubKeyError,
    SubKeyMissingError,
    SubKeyParseError,
)
from envconfig.secrets.identifiers import extract_region, is_valid_identifier
from envconfig.secrets.registry import available_backends, get_backend, register_backend

__all__ = [
    "SecretsClient",
    "SecretProvider",
    "SecretPayload",
    "CacheEntry",
    "CacheTable",
    "is_valid_identifier",
    "extract_region",
    "SecretError",
    "InvalidIdentifierError",
    "SessionError",
    "ServiceError",
    "SecretFetchError",
    "SecretNotTextError",
    "SubKeyError",
    "SubKeyParseError",
    "SubKeyMissingError",
    "SecretNotFoundError",
    "SecretBackendError",
    "register_backend",
    "get_backend",
    "available_backends",
]
