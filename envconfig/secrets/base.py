"""Abstract base class for secret providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class SecretPayload:
    """Raw result of a provider fetch: a textual value, a binary one, or neither."""

    text: Optional[str] = None
    binary: Optional[bytes] = None

    @property
    def is_text(self) -> bool:
        return isinstance(self.text, str) and self.text != ""


class SecretProvider(ABC):
    """
    Capability interface every secret store must implement.

    The client drives a provider in four steps, each of which it memoizes:
    establish a session for a region, check that the session's credentials
    are usable, build a service handle on top of the session, and fetch
    secret values through that handle.
    """

    @abstractmethod
    def establish_session(self, profile: Optional[str], region: Optional[str]) -> Any:
        """
        Create an authenticated session.

        Args:
            profile: Named credential profile, or None for the default chain
            region: Region name, or None to let the provider discover it

        Returns:
            Provider-specific session object

        Raises:
            Exception: Any provider error; the client wraps it
        """
        pass

    @abstractmethod
    def credentials_are_usable(self, session: Any) -> bool:
        """Return True if the session can actually yield credentials."""
        pass

    @abstractmethod
    def new_service_handle(self, session: Any) -> Any:
        """Build the secret-store client on top of a session."""
        pass

    @abstractmethod
    def fetch_secret_value(self, service: Any, identifier: str) -> SecretPayload:
        """
        Retrieve a secret by identifier.

        Args:
            service: Handle returned by new_service_handle
            identifier: Secret ARN or name

        Returns:
            The payload as stored by the provider

        Raises:
            SecretNotFoundError: If secret doesn't exist
            Exception: Any other provider error
        """
        pass
