"""HMAC signature computation and comparison utilities."""

import hmac
import hashlib
import math
import time
from typing import Callable, Optional, Union

from ..types import HeaderScheme
from .header import resolve_scheme

BytesLike = Union[bytes, bytearray, str]


def _to_bytes(value: BytesLike) -> Union[bytes, bytearray]:
    if isinstance(value, str):
        return value.encode("utf-8")
    return value


def to_text(value: Union[bytes, str, None]) -> Optional[str]:
    """Decode raw bytes as UTF-8, replacing invalid sequences with U+FFFD."""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def build_signed_payload(timestamp: int, payload: str) -> str:
    """Join a timestamp and payload into the message that gets signed."""
    return f"{timestamp}.{payload}"


def compute_signature(payload: str, secret: BytesLike) -> str:
    """
    Compute an HMAC-SHA256 signature.

    Args:
        payload: Signed message (``"<timestamp>.<body>"``)
        secret: Shared secret key

    Returns:
        Lowercase hex digest (64 characters)
    """
    return hmac.new(
        _to_bytes(secret),
        payload.encode("utf-8"),
        hashlib.sha256
    ).hexdigest()


def secure_compare(a: BytesLike, b: BytesLike) -> bool:
    """
    Compare two signatures without leaking where they differ.

    Lengths are not secret, so unequal lengths return early. Otherwise every
    byte pair is visited regardless of earlier mismatches.
    """
    a = _to_bytes(a)
    b = _to_bytes(b)

    if len(a) != len(b):
        return False

    result = 0
    for x, y in zip(a, b):
        result |= x ^ y
    return result == 0


def generate_header(
    payload: Union[bytes, str],
    secret: BytesLike,
    timestamp: Optional[int] = None,
    scheme: Union[HeaderScheme, str] = HeaderScheme.V1,
    clock: Callable[[], float] = time.time
) -> str:
    """
    Build a signature header for a payload.

    Args:
        payload: Request body
        secret: Shared secret key
        timestamp: Unix timestamp in seconds (default: current time)
        scheme: Signature scheme tag
        clock: Time source used when ``timestamp`` is omitted

    Returns:
        Header value in ``t=<timestamp>,v1=<signature>`` form
    """
    tag = resolve_scheme(scheme).value
    payload = to_text(payload)
    if timestamp is None:
        timestamp = math.floor(clock())

    signature = compute_signature(build_signed_payload(timestamp, payload), secret)
    return f"t={timestamp},{tag}={signature}"
