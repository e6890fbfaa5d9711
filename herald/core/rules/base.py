"""Rule strategy contract shared by every event type.

A strategy bundles the five capabilities the processor needs for one event
kind: fetch the context, then derive the (optional) chat, email, queue and
topic messages.  Strategies are selected by ``EventKind`` through the rule
registry; message derivation is pure.
"""

from __future__ import annotations

import abc
from typing import Any, ClassVar, Protocol, runtime_checkable

from herald.core.enrichment import Enricher, NoEnrichment
from herald.models.events import EventKind
from herald.models.messages import (
    ChatMessage,
    EmailMessage,
    MessageSet,
    QueueMessage,
    TopicMessage,
)


@runtime_checkable
class NotificationRules(Protocol):
    """Protocol every per-event-type strategy implements."""

    event_kind: ClassVar[EventKind]

    async def enrich(self, event: Any) -> Any:
        """Return the context consumed by the message builders."""
        ...

    def chat(self, event: Any, context: Any) -> ChatMessage | None:
        ...

    def email(self, event: Any, context: Any) -> EmailMessage | None:
        ...

    def queue(self, event: Any, context: Any) -> QueueMessage | None:
        ...

    def topic(self, event: Any, context: Any) -> TopicMessage | None:
        ...


class ChatOnlyRules(abc.ABC):
    """Defaults for strategies that need no context and only post to chat."""

    event_kind: ClassVar[EventKind]
    enricher: ClassVar[Enricher] = NoEnrichment()

    async def enrich(self, event: Any) -> None:
        return await self.enricher.enrich(event)

    @abc.abstractmethod
    def chat(self, event: Any, context: Any) -> ChatMessage | None:
        """Return the chat message for *event*, or ``None`` to stay silent."""
        ...

    def email(self, event: Any, context: Any) -> EmailMessage | None:
        return None

    def queue(self, event: Any, context: Any) -> QueueMessage | None:
        return None

    def topic(self, event: Any, context: Any) -> TopicMessage | None:
        return None


def derive_messages(rules: NotificationRules, event: Any, context: Any) -> MessageSet:
    """Evaluate every channel rule for *event* and collect the results."""
    return MessageSet(
        chat=rules.chat(event, context),
        email=rules.email(event, context),
        queue=rules.queue(event, context),
        topic=rules.topic(event, context),
    )
