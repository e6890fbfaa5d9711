"""Identity provider rules."""

from __future__ import annotations

import logging
from typing import ClassVar

from herald.core.rules.base import ChatOnlyRules
from herald.models.events import EventKind, IdentityProviderEvent
from herald.models.messages import ChatMessage

logger = logging.getLogger(__name__)


class IdentityProviderRules(ChatOnlyRules):
    """Warn on identity provider events outside intg."""

    event_kind: ClassVar[EventKind] = EventKind.IDENTITY_PROVIDER

    def chat(self, event: IdentityProviderEvent, context: None) -> ChatMessage | None:
        if event.environment == "intg":
            logger.info("Skipping chat for intg identity provider event")
            return None
        return ChatMessage.from_texts(
            f":warning: Keycloak Event {event.environment}: {event.message}"
        )
