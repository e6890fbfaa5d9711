"""Maintenance job rules."""

from __future__ import annotations

from typing import ClassVar

from herald.core.rules.base import ChatOnlyRules
from herald.models.events import EventKind, MaintenanceEvent
from herald.models.messages import ChatMessage

BACKUP_FAILED_MESSAGE = (
    "The Jenkins backup has failed. Please check the maintenance window in systems manager"
)


class MaintenanceRules(ChatOnlyRules):
    event_kind: ClassVar[EventKind] = EventKind.MAINTENANCE

    def chat(self, event: MaintenanceEvent, context: None) -> ChatMessage | None:
        if event.success:
            return None
        return ChatMessage.from_texts(BACKUP_FAILED_MESSAGE)
