"""Webhook signature verification for Python."""

from .errors import (
    MissingTimestampError,
    NoSignaturesError,
    SignatureMismatchError,
    StaleTimestampError,
    UnsupportedSchemeError,
    WebhookVerificationError
)
from .receiver import WebhookReceiver
from .types import HeaderScheme, SignedHeader, WebhookEvent
from .utils.header import parse_header
from .utils.signature import compute_signature, generate_header, secure_compare
from .verifier import DEFAULT_TOLERANCE, WebhookVerifier, verify_header

__version__ = "1.0.0"
__all__ = [
    "DEFAULT_TOLERANCE",
    "HeaderScheme",
    "SignedHeader",
    "WebhookEvent",
    "WebhookVerifier",
    "WebhookReceiver",
    "verify_header",
    "parse_header",
    "compute_signature",
    "generate_header",
    "secure_compare",
    "WebhookVerificationError",
    "MissingTimestampError",
    "NoSignaturesError",
    "SignatureMismatchError",
    "StaleTimestampError",
    "UnsupportedSchemeError"
]
