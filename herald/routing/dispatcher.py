"""ChannelDispatcher — sends each derived message to its channel.

Every populated channel slot is attempted exactly once, concurrently, with
its own timeout.  A failure on one channel never prevents the others from
being attempted.  Outcomes are folded into a :class:`DispatchResult` in the
fixed order chat, email, queue, topic.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from herald.config import HeraldConfig
from herald.models.events import Event
from herald.models.messages import (
    ChannelKind,
    ChatMessage,
    EmailMessage,
    Message,
    MessageSet,
    QueueMessage,
    TopicMessage,
)
from herald.models.results import ChannelOutcome, DispatchResult
from herald.routing.channels import ChatChannel, EmailChannel, QueueChannel, TopicChannel
from herald.routing.destinations import resolve_chat_destination

logger = logging.getLogger(__name__)


class ChannelSendError(RuntimeError):
    """Raised after dispatch when one or more channels failed.

    Carries the channel of the first failure and the full result so the
    caller can see what was sent before reporting the invocation as failed.
    """

    def __init__(
        self,
        channel: ChannelKind,
        message: str,
        *,
        result: DispatchResult | None = None,
    ) -> None:
        super().__init__(f"{channel.value} channel failed: {message}")
        self.channel = channel
        self.result = result


class DestinationNotConfiguredError(LookupError):
    """Raised when a message's logical destination has no configured address."""


def raise_for_failure(result: DispatchResult) -> None:
    """Raise :class:`ChannelSendError` for the first failed channel, if any."""
    first = result.first_failure
    if first is None:
        return
    raise ChannelSendError(first.channel, first.error or "", result=result) from first.exception


class ChannelDispatcher:
    """Routes a :class:`MessageSet` to the four channel clients.

    Usage
    -----
    >>> dispatcher = ChannelDispatcher(config, chat=slack, email=ses, queue=sqs, topic=sns)
    >>> result = await dispatcher.dispatch(event, messages)
    """

    def __init__(
        self,
        config: HeraldConfig,
        *,
        chat: ChatChannel | None = None,
        email: EmailChannel | None = None,
        queue: QueueChannel | None = None,
        topic: TopicChannel | None = None,
    ) -> None:
        self._chat = chat
        self._email = email
        self._queue = queue
        self._topic = topic
        self._chat_webhooks = config.chat_webhooks
        self._queue_urls = dict(config.queue_urls)
        self._topic_arns = dict(config.topic_arns)
        self._timeout = config.channel_timeout_seconds

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def dispatch(self, event: Event, messages: MessageSet) -> DispatchResult:
        """Send every populated slot of *messages* and aggregate the outcomes.

        Never raises for channel failures; inspect the result or call
        :func:`raise_for_failure`.
        """
        if messages.is_empty:
            logger.info("No messages derived for %s event", event.kind.value)
            return DispatchResult()

        attempts = [
            self._attempt(event, channel, message) for channel, message in messages.items()
        ]
        outcomes = await asyncio.gather(*attempts)
        result = DispatchResult.from_outcomes({outcome.channel: outcome for outcome in outcomes})

        if result.failed:
            logger.warning(
                "%s event: %d/%d channels succeeded, %d failed",
                event.kind.value,
                len(result.sent),
                len(outcomes),
                len(result.failures),
            )
        return result

    async def _attempt(
        self, event: Event, channel: ChannelKind, message: Message
    ) -> ChannelOutcome:
        try:
            destination, address = self._resolve(event, channel, message)
        except DestinationNotConfiguredError as exc:
            logger.error("Cannot send %s message: %s", channel.value, exc)
            return ChannelOutcome.failed(channel, exc)

        try:
            message_id = await asyncio.wait_for(
                self._send(channel, address, message),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            error = TimeoutError(f"{channel.value} send timed out after {self._timeout:g}s")
            logger.error("Channel %s timed out sending to %s", channel.value, destination)
            return ChannelOutcome.failed(channel, error, destination)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Channel %s failed sending to %s: %s", channel.value, destination, exc
            )
            return ChannelOutcome.failed(channel, exc, destination)

        logger.info("Sent %s message to %s (%s)", channel.value, destination, message_id)
        return ChannelOutcome.sent(channel, message_id, destination)

    # ------------------------------------------------------------------
    # Destinations
    # ------------------------------------------------------------------

    def _resolve(
        self, event: Event, channel: ChannelKind, message: Message
    ) -> tuple[str, str]:
        """Return ``(destination key, address)`` for *message*."""
        if isinstance(message, ChatMessage):
            key = resolve_chat_destination(event)
            url = self._chat_webhooks.get(key, "")
            if not url:
                raise DestinationNotConfiguredError(f"No chat webhook configured for {key.value!r}")
            return key.value, url
        if isinstance(message, EmailMessage):
            if not message.to:
                raise DestinationNotConfiguredError("Email has no recipient")
            return message.to, message.to
        if isinstance(message, QueueMessage):
            return message.queue_key, self._lookup(self._queue_urls, "queue", message.queue_key)
        if isinstance(message, TopicMessage):
            return message.topic_key, self._lookup(self._topic_arns, "topic", message.topic_key)
        raise DestinationNotConfiguredError(f"Unsupported message for {channel.value}")

    @staticmethod
    def _lookup(addresses: dict[str, str], kind: str, key: str) -> str:
        address = addresses.get(key)
        if not address:
            raise DestinationNotConfiguredError(f"No {kind} configured for key {key!r}")
        return address

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    async def _send(self, channel: ChannelKind, address: str, message: Any) -> str:
        if channel is ChannelKind.CHAT:
            return await self._require(self._chat, channel).post(address, message.payload())
        if channel is ChannelKind.EMAIL:
            return await self._require(self._email, channel).send(
                message.sender, message.to, message.subject, message.html_body
            )
        if channel is ChannelKind.QUEUE:
            return await self._require(self._queue, channel).send(address, message.body)
        return await self._require(self._topic, channel).publish(address, message.body)

    @staticmethod
    def _require(client: Any, channel: ChannelKind) -> Any:
        if client is None:
            raise RuntimeError(f"No {channel.value} client configured")
        return client
