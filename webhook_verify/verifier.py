"""Webhook signature verifier."""

import logging
import math
import time
from typing import Callable, NoReturn, Optional, Union

from .errors import (
    MissingTimestampError,
    NoSignaturesError,
    SignatureMismatchError,
    StaleTimestampError,
    WebhookVerificationError
)
from .types import HeaderScheme
from .utils.header import parse_header, resolve_scheme
from .utils.signature import (
    BytesLike,
    build_signed_payload,
    compute_signature,
    secure_compare,
    to_text
)

DEFAULT_TOLERANCE = 300  # 5 minutes


class WebhookVerifier:
    """
    Verifies signed webhook deliveries.

    The verifier holds configuration only; secrets are passed per call and
    never stored, so one instance can be shared across threads.

    Example:
        >>> verifier = WebhookVerifier(tolerance=300)
        >>> verifier.verify(
        ...     request.body,
        ...     request.headers["Webhook-Signature"],
        ...     "whsec_..."
        ... )
        True
    """

    def __init__(
        self,
        tolerance: int = DEFAULT_TOLERANCE,
        scheme: Union[HeaderScheme, str] = HeaderScheme.V1,
        clock: Callable[[], float] = time.time,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize WebhookVerifier.

        Args:
            tolerance: Maximum timestamp age in seconds; 0 or less disables
                the freshness check (default: 300)
            scheme: Signature scheme to accept (default: v1)
            clock: Time source returning Unix seconds (default: time.time)
            logger: Custom logger instance

        Raises:
            UnsupportedSchemeError: If ``scheme`` is not supported
        """
        self.tolerance = tolerance
        self.scheme = resolve_scheme(scheme)
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    def verify(
        self,
        payload: Union[bytes, str],
        header: Union[bytes, str, None],
        secret: BytesLike,
        tolerance: Optional[int] = None
    ) -> bool:
        """
        Verify a payload against its signature header.

        Args:
            payload: Raw request body
            header: Signature header value
            secret: Shared secret key
            tolerance: Override for the configured tolerance

        Returns:
            True if the payload is authentic and fresh

        Raises:
            MissingTimestampError: Header is absent or has no ``t`` field
            NoSignaturesError: Header has no signature for the scheme
            SignatureMismatchError: No signature matches the payload
            StaleTimestampError: Timestamp is outside the tolerance window
        """
        if tolerance is None:
            tolerance = self.tolerance

        payload = to_text(payload)
        header = to_text(header)

        details = parse_header(header, self.scheme)

        if details.timestamp is None:
            self._reject(MissingTimestampError(
                "Unable to extract timestamp and signatures from header"
            ))

        if not details.signatures:
            self._reject(NoSignaturesError(
                f"No signatures found with expected scheme '{self.scheme.value}'"
            ))

        expected_signature = compute_signature(
            build_signed_payload(details.timestamp, payload),
            secret
        )

        # Check every candidate so the count of comparisons is fixed
        matches = [
            secure_compare(signature, expected_signature)
            for signature in details.signatures
        ]
        if not any(matches):
            self._reject(SignatureMismatchError(
                "No signatures found matching the expected signature for payload"
            ))

        age = math.floor(self.clock()) - details.timestamp

        if tolerance > 0 and age > tolerance:
            self._reject(StaleTimestampError(
                f"Timestamp outside the tolerance zone ({age}s > {tolerance}s)"
            ))

        self.logger.debug(
            f"Webhook verified (t={details.timestamp}, "
            f"candidates={len(details.signatures)}, age={age}s)"
        )
        return True

    def _reject(self, error: WebhookVerificationError) -> NoReturn:
        self.logger.warning(f"Webhook verification failed: {error.kind}")
        raise error


def verify_header(
    payload: Union[bytes, str],
    header: Union[bytes, str, None],
    secret: BytesLike,
    tolerance: int = DEFAULT_TOLERANCE,
    clock: Optional[Callable[[], float]] = None
) -> bool:
    """
    Verify a webhook in one call.

    Args:
        payload: Raw request body
        header: Signature header value
        secret: Shared secret key
        tolerance: Maximum timestamp age in seconds (default: 300)
        clock: Time source returning Unix seconds (default: time.time)

    Returns:
        True if the payload is authentic and fresh

    Raises:
        WebhookVerificationError: If verification fails

    Example:
        try:
            verify_header(body, headers["Webhook-Signature"], secret)
        except WebhookVerificationError as e:
            return {"error": e.kind}, 401
    """
    verifier = WebhookVerifier(tolerance=tolerance, clock=clock or time.time)
    return verifier.verify(payload, header, secret)
