"""Custom exceptions for secret management."""


class SecretError(Exception):
    """Base exception for anything that prevents a secret from resolving."""

    pass


class InvalidIdentifierError(SecretError):
    """Raised when a string is not an acceptable secret identifier."""

    pass


class SessionError(SecretError):
    """Raised when no usable provider session exists for a region."""

    pass


class ServiceError(SecretError):
    """Raised when a service handle cannot be built for a region."""

    pass


class SecretFetchError(SecretError):
    """Raised when the provider call for a secret fails."""

    pass


class SecretNotTextError(SecretError):
    """Raised when a secret payload is empty or not a string."""

    pass


class SubKeyError(SecretError):
    """Base exception for sub-key projection into a JSON secret."""

    pass


class SubKeyParseError(SubKeyError):
    """Raised when a secret value is not a flat JSON object of strings."""

    pass


class SubKeyMissingError(SubKeyError):
    """Raised when the requested sub-key is absent from the secret."""

    pass


class SecretNotFoundError(SecretError):
    """Raised when a secret cannot be found in the backend."""

    pass


class SecretBackendError(SecretError):
    """Raised when there's an issue with the secret backend itself."""

    pass
