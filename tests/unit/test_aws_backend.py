"""Tests for the AWS Secrets Manager backend."""

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError, NoCredentialsError

from envconfig.secrets.aws_backend import AwsSecretsManagerBackend
from envconfig.secrets.client import SecretsClient
from envconfig.secrets.exceptions import (
    SecretFetchError,
    SecretNotFoundError,
    SecretNotTextError,
    SessionError,
)


def client_error(code: str) -> ClientError:
    return ClientError(
        {"Error": {"Code": code, "Message": f"{code} happened"}}, "GetSecretValue"
    )


class TestAwsSecretsManagerBackend:
    """Tests for AwsSecretsManagerBackend."""

    def test_establish_session_passes_profile_and_region(self):
        """Should build a boto3 session with the given profile and region."""
        backend = AwsSecretsManagerBackend()

        with patch("envconfig.secrets.aws_backend.boto3.session.Session") as mock_session:
            session = backend.establish_session("deploy", "us-east-1")

        mock_session.assert_called_once_with(profile_name="deploy", region_name="us-east-1")
        assert session is mock_session.return_value

    def test_credentials_usable(self):
        """Should accept a session whose credentials resolve."""
        session = MagicMock()
        session.get_credentials.return_value.get_frozen_credentials.return_value = MagicMock(
            access_key="AKIA", secret_key="secret"
        )

        assert AwsSecretsManagerBackend().credentials_are_usable(session) is True

    def test_credentials_missing(self):
        """Should reject a session with no credentials at all."""
        session = MagicMock()
        session.get_credentials.return_value = None

        assert AwsSecretsManagerBackend().credentials_are_usable(session) is False

    def test_credentials_fail_to_load(self):
        """Should reject credentials that raise while loading."""
        session = MagicMock()
        session.get_credentials.return_value.get_frozen_credentials.side_effect = (
            NoCredentialsError()
        )

        assert AwsSecretsManagerBackend().credentials_are_usable(session) is False

    def test_new_service_handle(self):
        """Should create a secretsmanager client from the session."""
        session = MagicMock()

        service = AwsSecretsManagerBackend().new_service_handle(session)

        session.client.assert_called_once_with("secretsmanager")
        assert service is session.client.return_value

    def test_fetch_secret_string(self):
        """Should return SecretString as text."""
        service = MagicMock()
        service.get_secret_value.return_value = {"SecretString": "value", "Name": "x"}

        payload = AwsSecretsManagerBackend().fetch_secret_value(service, "prod/x")

        service.get_secret_value.assert_called_once_with(SecretId="prod/x")
        assert payload.is_text
        assert payload.text == "value"

    def test_fetch_secret_binary(self):
        """Should return SecretBinary as a non-text payload."""
        service = MagicMock()
        service.get_secret_value.return_value = {"SecretBinary": b"\x00\x01"}

        payload = AwsSecretsManagerBackend().fetch_secret_value(service, "prod/x")

        assert payload.is_text is False
        assert payload.binary == b"\x00\x01"

    def test_fetch_not_found(self):
        """ResourceNotFoundException becomes SecretNotFoundError."""
        service = MagicMock()
        service.get_secret_value.side_effect = client_error("ResourceNotFoundException")

        with pytest.raises(SecretNotFoundError) as exc_info:
            AwsSecretsManagerBackend().fetch_secret_value(service, "prod/x")

        assert "prod/x" in str(exc_info.value)

    def test_fetch_other_client_error_propagates(self):
        """Other AWS errors are left for the client to wrap."""
        service = MagicMock()
        service.get_secret_value.side_effect = client_error("AccessDeniedException")

        with pytest.raises(ClientError):
            AwsSecretsManagerBackend().fetch_secret_value(service, "prod/x")


class TestSecretsClientWithAws:
    """End-to-end client behaviour over a mocked boto3 session."""

    @pytest.fixture
    def boto_session(self):
        session = MagicMock()
        session.get_credentials.return_value.get_frozen_credentials.return_value = MagicMock(
            access_key="AKIA", secret_key="secret"
        )
        with patch(
            "envconfig.secrets.aws_backend.boto3.session.Session", return_value=session
        ) as mock_session:
            yield mock_session, session

    def test_secret_fetched_once(self, boto_session):
        """Should call GetSecretValue once for repeated lookups."""
        # Arrange
        mock_session, session = boto_session
        service = session.client.return_value
        service.get_secret_value.return_value = {"SecretString": "value"}
        client = SecretsClient(AwsSecretsManagerBackend(), default_region="us-east-1")

        # Act
        values = [client.get_secret("prod/x") for _ in range(3)]

        # Assert
        assert values == ["value"] * 3
        assert service.get_secret_value.call_count == 1
        assert mock_session.call_count == 1

    def test_access_denied_is_cached(self, boto_session):
        """An AWS error is wrapped and never retried."""
        # Arrange
        _, session = boto_session
        service = session.client.return_value
        service.get_secret_value.side_effect = client_error("AccessDeniedException")
        client = SecretsClient(AwsSecretsManagerBackend(), default_region="us-east-1")

        # Act & Assert
        for _ in range(2):
            with pytest.raises(SecretFetchError) as exc_info:
                client.get_secret("prod/x")
            assert "AccessDeniedException" in str(exc_info.value)
        assert service.get_secret_value.call_count == 1

    def test_binary_secret_rejected(self, boto_session):
        """A binary-only secret is a SecretNotTextError."""
        _, session = boto_session
        session.client.return_value.get_secret_value.return_value = {
            "SecretBinary": b"\x00"
        }
        client = SecretsClient(AwsSecretsManagerBackend(), default_region="us-east-1")

        with pytest.raises(SecretNotTextError):
            client.get_secret("prod/x")

    def test_unknown_profile_is_session_error(self):
        """A profile boto3 doesn't know about fails the session."""
        from botocore.exceptions import ProfileNotFound

        with patch(
            "envconfig.secrets.aws_backend.boto3.session.Session",
            side_effect=ProfileNotFound(profile="ghost"),
        ):
            client = SecretsClient(AwsSecretsManagerBackend(), profile="ghost")

            with pytest.raises(SessionError) as exc_info:
                client.get_session("")

        assert "ghost" in str(exc_info.value)
