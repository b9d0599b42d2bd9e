"""AWS Secrets Manager secret backend."""

from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from envconfig.secrets.base import SecretPayload, SecretProvider
from envconfig.secrets.exceptions import SecretNotFoundError
from envconfig.secrets.registry import register_backend
from envconfig.utils.logging import get_logger

logger = get_logger(__name__)


@register_backend("aws")
class AwsSecretsManagerBackend(SecretProvider):
    """
    Reads secrets from AWS Secrets Manager with boto3.

    Sessions follow the usual boto3 credential chain: the named profile if
    one is given, otherwise environment variables, shared config files and
    instance/container roles. Without an explicit region the profile's
    configured region is used.

    Examples:
        {prod/db/password}
        {{arn:aws:secretsmanager:us-east-1:123456789012:secret:prod/db-AbC123}}
        {prod/db[username]}
    """

    SERVICE_NAME = "secretsmanager"

    def establish_session(self, profile: Optional[str], region: Optional[str]) -> Any:
        # Raises botocore.exceptions.ProfileNotFound for an unknown profile
        session = boto3.session.Session(profile_name=profile, region_name=region)
        logger.debug(
            f"Created boto3 session (profile={profile or 'default'}, "
            f"region={session.region_name or 'unset'})"
        )
        return session

    def credentials_are_usable(self, session: Any) -> bool:
        credentials = session.get_credentials()
        if credentials is None:
            return False
        try:
            frozen = credentials.get_frozen_credentials()
        except BotoCoreError as e:
            logger.warning(f"Credentials could not be loaded: {e}")
            return False
        return bool(frozen.access_key and frozen.secret_key)

    def new_service_handle(self, session: Any) -> Any:
        return session.client(self.SERVICE_NAME)

    def fetch_secret_value(self, service: Any, identifier: str) -> SecretPayload:
        try:
            response = service.get_secret_value(SecretId=identifier)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code == "ResourceNotFoundException":
                raise SecretNotFoundError(
                    f"Secret '{identifier}' not found in Secrets Manager"
                ) from e
            raise

        return SecretPayload(
            text=response.get("SecretString"),
            binary=response.get("SecretBinary"),
        )
