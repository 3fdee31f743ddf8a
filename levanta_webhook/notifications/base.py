"""
Notification Sink Base Module

Defines the interface every outbound notification destination implements.

Design Decisions:
- Delivery is best-effort: send() never raises
- Transient transport errors are retried a few times, HTTP error statuses are not
- A fresh httpx client per delivery, deliveries are rare
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from levanta_webhook.logging_config import get_logger

logger = get_logger(__name__)


class NotificationError(Exception):
    """Custom exception for notification delivery failures."""
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class NotificationSink(ABC):
    """
    Abstract outbound notification destination.

    Subclasses implement `deliver`, which may raise. Callers use `send`,
    which logs failures instead of propagating them.
    """

    name = "sink"

    @abstractmethod
    async def deliver(self, message: str) -> None:
        """Deliver a message, raising on failure."""

    async def send(self, message: str) -> None:
        """Deliver a message, logging any failure."""
        try:
            await self.deliver(message)
        except Exception as e:
            logger.error(
                "Notification delivery failed",
                sink=self.name,
                error=str(e),
                error_type=type(e).__name__
            )
            return

        logger.info("Notification delivered", sink=self.name)


class NullSink(NotificationSink):
    """Sink used when no destination is configured."""

    name = "none"

    async def deliver(self, message: str) -> None:
        logger.debug("No notification sink configured, dropping message")


class HTTPNotificationSink(NotificationSink):
    """
    Base class for sinks that POST a JSON document to a URL.

    Usage:
        class MySink(HTTPNotificationSink):
            def build_request(self, message):
                return "https://example.com/hook", {"text": message}
    """

    def __init__(
        self,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the sink.

        Args:
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self.timeout = timeout
        self._transport = transport

    @abstractmethod
    def build_request(self, message: str) -> tuple[str, Dict[str, Any]]:
        """Return the target URL and JSON body for a message."""

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True
    )
    async def deliver(self, message: str) -> None:
        url, payload = self.build_request(message)

        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport
        ) as client:
            response = await client.post(url, json=payload)

        if response.status_code >= 400:
            raise NotificationError(
                f"{self.name} API error: {response.status_code}",
                status_code=response.status_code,
                response_body=response.text[:500]
            )
