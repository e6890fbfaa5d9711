"""NotificationProcessor — one invocation from raw payload to dispatch result.

The processor is the only place the four stages meet::

    raw bytes -> EventDecoder -> rules.enrich -> derive_messages -> ChannelDispatcher

Stages are strictly sequential: decoding fails fast before any lookup, and
a failed lookup aborts before anything is sent.  Only dispatch fans out.
"""

from __future__ import annotations

import asyncio
import logging

from herald.config import HeraldConfig
from herald.core.decoder import EventDecoder
from herald.core.rules import NotificationRules, RuleRegistry, build_rule_registry, derive_messages
from herald.models.events import Event
from herald.models.messages import MessageSet
from herald.models.results import DispatchResult
from herald.routing.dispatcher import ChannelDispatcher, raise_for_failure

logger = logging.getLogger(__name__)


class NotificationProcessor:
    """Runs the notification pipeline for one inbound payload.

    Parameters
    ----------
    decoder:
        Turns the raw payload into a typed event.
    rules:
        One strategy per event kind.
    dispatcher:
        Sends the derived messages.
    """

    def __init__(
        self,
        decoder: EventDecoder,
        rules: RuleRegistry,
        dispatcher: ChannelDispatcher,
    ) -> None:
        self.decoder = decoder
        self.rules = rules
        self.dispatcher = dispatcher

    @classmethod
    def from_config(cls, config: HeraldConfig) -> NotificationProcessor:
        """Wire the boto3 and httpx backed channels described by *config*.

        Decrypts secret fields first (when enabled) and runs the startup
        guard on the result.
        """
        from herald.bridge import (
            EcrFindingsLookup,
            SesEmailChannel,
            SlackWebhookClient,
            SnsTopicChannel,
            SqsQueueChannel,
            create_aws_client,
            decrypt_config,
        )
        from herald.core.config_guard import enforce_destination_constraints

        if config.decrypt_secrets:
            config = decrypt_config(config, create_aws_client("kms", config))
        enforce_destination_constraints(config)

        dispatcher = ChannelDispatcher(
            config,
            chat=SlackWebhookClient(timeout_seconds=config.channel_timeout_seconds),
            email=SesEmailChannel(create_aws_client("ses", config)),
            queue=SqsQueueChannel(create_aws_client("sqs", config)),
            topic=SnsTopicChannel(create_aws_client("sns", config)),
        )
        lookup = EcrFindingsLookup(create_aws_client("ecr", config))
        return cls(EventDecoder(), build_rule_registry(config, lookup), dispatcher)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def rules_for(self, event: Event) -> NotificationRules:
        return self.rules[event.kind]

    async def derive(self, event: Event) -> MessageSet:
        """Enrich *event* and derive its messages without sending anything."""
        strategy = self.rules_for(event)
        context = await strategy.enrich(event)
        return derive_messages(strategy, event, context)

    async def process_async(self, raw: bytes | str) -> DispatchResult:
        """Decode, enrich, derive and dispatch *raw*.

        Raises
        ------
        DecodeError
            The payload matched no known event schema.
        EnrichmentError
            The context lookup failed; nothing was sent.
        ChannelSendError
            At least one channel failed; the others were still attempted.
        """
        event = self.decoder.decode(raw)
        messages = await self.derive(event)
        result = await self.dispatcher.dispatch(event, messages)
        logger.info("%s event processed: %s", event.kind.value, result.summary())
        raise_for_failure(result)
        return result

    def process(self, raw: bytes | str) -> DispatchResult:
        """Synchronous wrapper around :meth:`process_async`."""
        return asyncio.run(self.process_async(raw))
