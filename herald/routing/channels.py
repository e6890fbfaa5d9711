"""Channel contracts — the narrow send interfaces the dispatcher depends on.

Concrete implementations live in :mod:`herald.bridge`.  Every method is a
coroutine returning the provider's message id (the response body for chat
webhooks) or raising on failure.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ChatChannel(Protocol):
    async def post(self, url: str, payload: dict[str, Any]) -> str:
        """POST *payload* as JSON to the webhook *url*."""
        ...


@runtime_checkable
class EmailChannel(Protocol):
    async def send(self, sender: str, to: str, subject: str, html_body: str) -> str:
        ...


@runtime_checkable
class QueueChannel(Protocol):
    async def send(self, queue_url: str, body: str) -> str:
        ...


@runtime_checkable
class TopicChannel(Protocol):
    async def publish(self, topic_arn: str, body: str) -> str:
        ...
