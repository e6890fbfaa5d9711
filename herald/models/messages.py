"""Outbound notification messages — one model per channel kind.

A rule evaluation produces a :class:`MessageSet`: at most one message for
each of the four channels.  The dispatcher consumes each message once.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ChannelKind(str, Enum):
    """The four notification channels."""

    CHAT = "chat"
    EMAIL = "email"
    QUEUE = "queue"
    TOPIC = "topic"


# Fixed reduction order for dispatch results.
CHANNEL_ORDER: tuple[ChannelKind, ...] = (
    ChannelKind.CHAT,
    ChannelKind.EMAIL,
    ChannelKind.QUEUE,
    ChannelKind.TOPIC,
)


class ChatText(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["mrkdwn"] = "mrkdwn"
    text: str


class ChatBlock(BaseModel):
    """A single ``section`` block of a chat webhook payload."""

    model_config = ConfigDict(frozen=True)

    type: Literal["section"] = "section"
    text: ChatText

    @classmethod
    def section(cls, text: str) -> ChatBlock:
        return cls(text=ChatText(text=text))


class ChatMessage(BaseModel):
    """A chat webhook message.

    The webhook it goes to is resolved from the originating event at dispatch
    time and recorded on the channel outcome.
    """

    model_config = ConfigDict(frozen=True)

    blocks: tuple[ChatBlock, ...]

    @classmethod
    def from_texts(cls, *texts: str) -> ChatMessage:
        return cls(blocks=tuple(ChatBlock.section(text) for text in texts))

    @property
    def texts(self) -> list[str]:
        return [block.text.text for block in self.blocks]

    def payload(self) -> dict:
        """Return the JSON body posted to the webhook."""
        return {"blocks": [block.model_dump(mode="json") for block in self.blocks]}


class EmailMessage(BaseModel):
    """An HTML email."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sender: str = Field(alias="from")
    to: str
    subject: str
    html_body: str


class QueueMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    queue_key: str
    body: str


class TopicMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    topic_key: str
    body: str


Message = Union[ChatMessage, EmailMessage, QueueMessage, TopicMessage]


class MessageSet(BaseModel):
    """The messages derived from one event: zero or one per channel."""

    model_config = ConfigDict(frozen=True)

    chat: ChatMessage | None = None
    email: EmailMessage | None = None
    queue: QueueMessage | None = None
    topic: TopicMessage | None = None

    def get(self, channel: ChannelKind) -> Message | None:
        return getattr(self, channel.value)

    def items(self) -> Iterator[tuple[ChannelKind, Message]]:
        """Yield populated slots in the fixed channel order."""
        for channel in CHANNEL_ORDER:
            message = self.get(channel)
            if message is not None:
                yield channel, message

    @property
    def is_empty(self) -> bool:
        return all(self.get(channel) is None for channel in CHANNEL_ORDER)
