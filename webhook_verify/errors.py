"""Exceptions raised while verifying webhook signatures."""


class UnsupportedSchemeError(ValueError):
    """Raised when a caller asks for a signature scheme that is not supported."""

    kind = "unsupported_scheme"


class WebhookVerificationError(Exception):
    """Raised when a webhook delivery cannot be authenticated."""

    kind = "verification_failed"


class MissingTimestampError(WebhookVerificationError):
    """Header is absent or carries no usable ``t`` field."""

    kind = "missing_timestamp"


class NoSignaturesError(WebhookVerificationError):
    """Header has no signature for the expected scheme."""

    kind = "no_signatures_for_scheme"


class SignatureMismatchError(WebhookVerificationError):
    """No candidate signature matches the expected signature."""

    kind = "signature_mismatch"


class StaleTimestampError(WebhookVerificationError):
    """Signed timestamp is older than the tolerance window."""

    kind = "stale_timestamp"
