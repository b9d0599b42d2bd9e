"""Memoizing secrets client.

Resolves secret identifiers through a SecretProvider while making sure that,
for the lifetime of one client:

- each distinct secret is fetched at most once;
- a session or service handle is built at most once per region;
- identifiers, sessions and credentials that failed once are not retried.
"""

from typing import Any, Optional

from envconfig.secrets.base import SecretProvider
from envconfig.secrets.cache import CacheTable
from envconfig.secrets.exceptions import (
    InvalidIdentifierError,
    SecretBackendError,
    SecretFetchError,
    SecretNotTextError,
    ServiceError,
    SessionError,
)
from envconfig.secrets.identifiers import extract_region, is_valid_identifier
from envconfig.secrets.registry import get_backend
from envconfig.utils.logging import get_logger
from monitoring import Metrics, track_time

logger = get_logger(__name__)


class SecretsClient:
    """
    Resolves secret identifiers into values, caching every outcome.

    One client is meant to serve one processing run and is then discarded.
    It is safe to share between threads: each of its three caches has its
    own lock.

    Usage:
        provider = get_backend("aws")()
        client = SecretsClient(provider, profile="deploy", default_region="us-east-1")
        password = client.get_secret("prod/db/password")
    """

    def __init__(
        self,
        provider: SecretProvider,
        profile: Optional[str] = None,
        default_region: str = "",
    ):
        """
        Args:
            provider: Secret store capability to drive
            profile: Named credential profile, None for the default chain
            default_region: Region for identifiers that carry none; empty
                means the provider's own default discovery
        """
        self.provider = provider
        self.profile = profile
        self.default_region = default_region or ""
        self.sessions = CacheTable("sessions")
        self.services = CacheTable("services")
        self.secrets = CacheTable("secrets")

    @classmethod
    def from_backend(
        cls,
        backend: str,
        profile: Optional[str] = None,
        default_region: str = "",
        **backend_config,
    ) -> "SecretsClient":
        """
        Create a client for a registered backend.

        Raises:
            SecretBackendError: If the backend is unknown or misconfigured
        """
        try:
            backend_cls = get_backend(backend)
            provider = backend_cls(**backend_config)
        except KeyError as e:
            raise SecretBackendError(e.args[0]) from e
        except TypeError as e:
            # Missing required argument (e.g., file backend needs path)
            raise SecretBackendError(f"Backend '{backend}' config error: {e}") from e

        logger.info(f"Initialized SecretsClient with backend: {backend}")
        return cls(provider, profile=profile, default_region=default_region)

    def get_session(self, region: str) -> Any:
        """
        Return an authenticated session for a region.

        Raises:
            SessionError: If no session with usable credentials can be built
        """
        return self.sessions.get_or_create(
            region, lambda: self._create_session(region)
        ).unwrap()

    def _create_session(self, region: str) -> Any:
        label = region or "default"
        try:
            session = self.provider.establish_session(self.profile, region or None)
        except Exception as e:
            raise SessionError(
                f"Could not create session for region '{label}': {e}"
            ) from e

        try:
            usable = self.provider.credentials_are_usable(session)
        except Exception as e:
            raise SessionError(
                f"Profile '{self.profile or 'default'}' has no valid credentials "
                f"or is not configured correctly: {e}"
            ) from e
        if not usable:
            raise SessionError(
                f"Profile '{self.profile or 'default'}' has no valid credentials "
                f"or is not configured correctly"
            )

        logger.info(f"Established session for region '{label}'")
        return session

    def get_service(self, region: str) -> Any:
        """
        Return the secret-store service handle for a region.

        Raises:
            ServiceError: If the region's session could not be established
        """
        return self.services.get_or_create(
            region, lambda: self._create_service(region)
        ).unwrap()

    def _create_service(self, region: str) -> Any:
        try:
            session = self.get_session(region)
        except SessionError as e:
            raise ServiceError(
                f"Could not get a secrets client for region '{region or 'default'}': {e}"
            ) from e
        try:
            return self.provider.new_service_handle(session)
        except Exception as e:
            raise ServiceError(
                f"Could not create a secrets client for region '{region or 'default'}': {e}"
            ) from e

    def get_secret(self, identifier: str) -> str:
        """
        Return the text value of a secret.

        The region comes from the identifier when it is an ARN, and from the
        client's default region otherwise.

        Raises:
            InvalidIdentifierError: If identifier is malformed (never cached)
            SecretFetchError: If the service or the provider call failed
            SecretNotTextError: If the secret holds no text
        """
        if not is_valid_identifier(identifier):
            raise InvalidIdentifierError(f"Identifier '{identifier}' is not valid")

        return self.secrets.get_or_create(
            identifier, lambda: self._fetch_secret(identifier)
        ).unwrap()

    def _fetch_secret(self, identifier: str) -> str:
        region = extract_region(identifier) or self.default_region

        try:
            service = self.get_service(region)
        except ServiceError as e:
            raise SecretFetchError(f"Could not get secret '{identifier}': {e}") from e

        try:
            with track_time() as t:
                payload = self.provider.fetch_secret_value(service, identifier)
        except Exception as e:
            Metrics.secret_fetch(success=False, latency=t["duration"])
            raise SecretFetchError(
                f"Could not get value of secret '{identifier}' "
                f"in region '{region or 'default'}': {e}"
            ) from e

        if not payload.is_text:
            Metrics.secret_fetch(success=False, latency=t["duration"])
            raise SecretNotTextError(f"Secret '{identifier}' does not contain text")

        Metrics.secret_fetch(success=True, latency=t["duration"])
        logger.debug(f"Fetched secret '{identifier}'")
        return payload.text

    def health_check(self) -> bool:
        """Check that a session can be established for the default region."""
        try:
            self.get_session(self.default_region)
        except SessionError:
            return False
        return True
