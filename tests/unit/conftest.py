"""Shared fixtures for unit tests."""

import pytest

from envconfig.secrets.base import SecretPayload, SecretProvider
from envconfig.secrets.client import SecretsClient
from envconfig.secrets.exceptions import SecretNotFoundError


class FakeProvider(SecretProvider):
    """In-memory provider that records every call made to it."""

    def __init__(self, secrets=None, failing_regions=(), unusable_regions=()):
        self.secrets = dict(secrets or {})
        self.failing_regions = set(failing_regions)
        self.unusable_regions = set(unusable_regions)
        self.session_calls = []
        self.service_calls = []
        self.fetch_calls = []

    def establish_session(self, profile, region):
        self.session_calls.append((profile, region))
        if region in self.failing_regions:
            raise RuntimeError(f"cannot reach {region}")
        return {"profile": profile, "region": region}

    def credentials_are_usable(self, session):
        return session["region"] not in self.unusable_regions

    def new_service_handle(self, session):
        self.service_calls.append(session["region"])
        return session

    def fetch_secret_value(self, service, identifier):
        self.fetch_calls.append((service["region"], identifier))
        if identifier not in self.secrets:
            raise SecretNotFoundError(f"Secret '{identifier}' not found")
        value = self.secrets[identifier]
        if isinstance(value, bytes):
            return SecretPayload(binary=value)
        return SecretPayload(text=value)


@pytest.fixture
def provider():
    return FakeProvider(
        secrets={
            "prod/api-key": "abc123",
            "prod/db": '{"user": "alice", "pass": "s3cr3t"}',
            "prod/cert": b"\x00\x01binary",
            "prod/empty": "",
            "prod/not-json": "plain value",
            "prod/nested": '{"user": "alice", "port": 5432}',
            "arn:aws:secretsmanager:sa-east-1:123456789012:secret:prod/db-AbC123": "from-arn",
        }
    )


@pytest.fixture
def client(provider):
    return SecretsClient(provider, profile="deploy", default_region="us-east-1")
