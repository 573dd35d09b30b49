"""Webhook receiver that verifies deliveries before dispatching them."""

import asyncio
import logging
from typing import Any, Callable, Mapping, Optional, Union

from .errors import WebhookVerificationError
from .types import WebhookEvent
from .utils.header import parse_header
from .utils.signature import BytesLike, to_text
from .verifier import DEFAULT_TOLERANCE, WebhookVerifier

DEFAULT_SIGNATURE_HEADER = "Webhook-Signature"


def _event_loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class WebhookReceiver:
    """
    Verifies HTTP webhook deliveries and passes them to a handler.

    Example:
        >>> receiver = WebhookReceiver(secret="whsec_...")
        >>>
        >>> @receiver.on_webhook
        >>> def handle_webhook(event):
        ...     print(f"Received: {event.json()}")
        >>>
        >>> receiver.handle_http_webhook(request.body, request.headers)
    """

    def __init__(
        self,
        secret: BytesLike,
        tolerance: int = DEFAULT_TOLERANCE,
        header_name: str = DEFAULT_SIGNATURE_HEADER,
        verifier: Optional[WebhookVerifier] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize WebhookReceiver.

        Args:
            secret: Shared secret key
            tolerance: Maximum timestamp age in seconds (default: 300)
            header_name: Signature header name, matched case-insensitively
            verifier: Custom verifier (tolerance is ignored when given)
            logger: Custom logger instance
        """
        if not secret:
            raise ValueError("secret is required")
        if not header_name:
            raise ValueError("header_name is required")

        self.header_name = header_name
        self.logger = logger or logging.getLogger(__name__)
        self.verifier = verifier or WebhookVerifier(
            tolerance=tolerance,
            logger=self.logger
        )
        self._secret = secret

        # Event handlers
        self._webhook_handler: Optional[Callable] = None
        self._error_handler: Optional[Callable] = None

    def on_webhook(self, handler: Callable[[WebhookEvent], Any]):
        """
        Register webhook event handler (decorator).

        Returning ``False`` from the handler marks the delivery as not
        processed.
        """
        self._webhook_handler = handler
        return handler

    def on_error(self, handler: Callable[[Exception], None]):
        """Register error event handler (decorator)."""
        self._error_handler = handler
        return handler

    def extract_header(
        self,
        headers: Mapping[str, Union[bytes, str]]
    ) -> Optional[Union[bytes, str]]:
        """Look up the signature header case-insensitively."""
        wanted = self.header_name.lower()
        for name, value in headers.items():
            if name.lower() == wanted:
                return value
        return None

    def handle_http_webhook(
        self,
        body: Union[bytes, str],
        headers: Mapping[str, str]
    ) -> bool:
        """
        Handle HTTP webhook delivery.

        Args:
            body: Raw request body
            headers: HTTP headers

        Returns:
            True if webhook was valid and processed
        """
        event = self._verify(body, headers)
        if event is None:
            return False

        if not self._webhook_handler:
            self.logger.warning("No webhook handler registered")
            return True

        try:
            result = self._webhook_handler(event)
            if asyncio.iscoroutine(result):
                if _event_loop_running():
                    result.close()
                    raise RuntimeError(
                        "Async handler called from a running event loop; "
                        "use handle_http_webhook_async instead"
                    )
                result = asyncio.run(result)
        except Exception as e:
            self._handler_failed(e)
            return False

        return result is not False

    async def handle_http_webhook_async(
        self,
        body: Union[bytes, str],
        headers: Mapping[str, str]
    ) -> bool:
        """Handle HTTP webhook delivery, awaiting async handlers."""
        event = self._verify(body, headers)
        if event is None:
            return False

        if not self._webhook_handler:
            self.logger.warning("No webhook handler registered")
            return True

        try:
            result = self._webhook_handler(event)
            if asyncio.iscoroutine(result):
                result = await result
        except Exception as e:
            self._handler_failed(e)
            return False

        return result is not False

    def _verify(
        self,
        body: Union[bytes, str],
        headers: Mapping[str, str]
    ) -> Optional[WebhookEvent]:
        """Verify a delivery and build its event, or None if it is invalid."""
        body = to_text(body)
        header = to_text(self.extract_header(headers))

        try:
            self.verifier.verify(body, header, self._secret)
        except WebhookVerificationError as e:
            self.logger.warning(f"Invalid HTTP webhook signature ({e.kind})")
            if self._error_handler:
                self._error_handler(e)
            return None

        details = parse_header(header, self.verifier.scheme)
        return WebhookEvent(
            timestamp=details.timestamp,
            signatures=details.signatures,
            body=body
        )

    def _handler_failed(self, error: Exception):
        self.logger.error(f"HTTP webhook handler error: {error}")
        if self._error_handler:
            self._error_handler(error)
