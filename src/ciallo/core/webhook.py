"""HTTP webhook transport abstraction.

Notification backends post their payloads through a WebhookClient so that
they can be tested against an in-memory fake.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from ciallo.core.errors import DeliveryError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class WebhookClient(ABC):
    """Abstract interface for posting JSON to a webhook URL."""

    @abstractmethod
    def post_json(self, url: str, payload: dict[str, Any]) -> int:
        """POST ``payload`` as a JSON body to ``url``.

        Args:
            url: Webhook endpoint
            payload: JSON-serializable request body

        Returns:
            HTTP status code of the response (any status, not only 2xx)

        Raises:
            DeliveryError: If no response was received (DNS failure, refused
                connection, timeout, ...)
        """
        ...


class RealWebhookClient(WebhookClient):
    """Production implementation using httpx.

    Args:
        timeout: Request timeout in seconds
        transport: Optional httpx transport, used by tests to avoid the network
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    def post_json(self, url: str, payload: dict[str, Any]) -> int:
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.post(url, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DeliveryError(f"Failed to reach webhook: {e}") from e
        logger.debug("POST %s -> %d", url, response.status_code)
        return response.status_code
