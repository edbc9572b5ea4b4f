"""Discord webhook notification adapter.

Implements WebhookPort by posting the embed payload to a Discord-compatible
incoming webhook. Delivery is best-effort: error responses and connection
failures are logged, never raised, and never retried.
"""

import logging
from typing import Any

import httpx

from intake.core.ports import WebhookPort

logger = logging.getLogger(__name__)


class DiscordWebhookNotificationAdapter(WebhookPort):
    """Posts intake summaries to a chat webhook."""

    def __init__(
        self,
        webhook_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the webhook adapter.

        Args:
            webhook_url: Full incoming webhook URL.
            timeout_seconds: Timeout applied to connect, read and write.
            transport: Optional httpx transport (used by tests).
        """
        if not webhook_url:
            raise ValueError("webhook_url must be a non-empty URL")
        self.webhook_url = webhook_url
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout_seconds,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def send(self, payload: dict[str, Any]) -> None:
        """Post a payload to the webhook."""
        try:
            client = await self._get_client()
            response = await client.post(self.webhook_url, json=payload)
        except httpx.HTTPError as e:
            logger.warning(f"Discord webhook error: {e}")
            return

        if response.status_code >= 400:
            logger.warning(
                f"Discord webhook responded {response.status_code}",
                extra={"response": response.text[:500]},
            )
            return

        logger.debug(f"Discord webhook delivered ({response.status_code})")
