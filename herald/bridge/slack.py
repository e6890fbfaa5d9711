"""Chat webhook client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class SlackWebhookClient:
    """Posts block payloads to Slack incoming webhooks.

    The webhook's response body (``"ok"`` on success) is returned as the
    message id.  Non-2xx responses raise ``httpx.HTTPStatusError``.

    Parameters
    ----------
    timeout_seconds:
        Per-request timeout.
    transport:
        Optional ``httpx`` transport, e.g. ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = httpx.Timeout(timeout=timeout_seconds)
        self._transport = transport

    async def post(self, url: str, payload: dict[str, Any]) -> str:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(url, json=payload)
            response.raise_for_status()
        logger.debug("Chat webhook responded %d", response.status_code)
        return response.text
