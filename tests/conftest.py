"""Shared fixtures for webhook verification tests."""

import hashlib
import hmac

import pytest

NOW = 1_700_000_000


def sign(payload: str, secret: str, timestamp: int) -> str:
    """Reference HMAC-SHA256 signature built directly with the stdlib."""
    return hmac.new(
        secret.encode("utf-8"),
        f"{timestamp}.{payload}".encode("utf-8"),
        hashlib.sha256
    ).hexdigest()


@pytest.fixture()
def secret() -> str:
    return "whsec_test"


@pytest.fixture()
def payload() -> str:
    return '{"type":"video.asset.ready","data":{"id":"abc123"}}'


@pytest.fixture()
def clock():
    """Frozen time source returning NOW."""
    return lambda: float(NOW)
