"""Chat destination resolution.

The webhook a chat message is posted to depends on the originating event:

* production judgment exports go to the judgment webhook,
* every other export status goes to the export webhook,
* identity provider events go to the high-priority webhook,
* everything else goes to the default webhook.
"""

from __future__ import annotations

from herald.config import ChatDestination
from herald.models.events import Event, ExportStatusEvent, IdentityProviderEvent


def resolve_chat_destination(event: Event) -> ChatDestination:
    if isinstance(event, ExportStatusEvent):
        details = event.success_details
        if (
            event.environment == "prod"
            and details is not None
            and details.consignment_type == "judgment"
        ):
            return ChatDestination.JUDGMENT
        return ChatDestination.EXPORT
    if isinstance(event, IdentityProviderEvent):
        return ChatDestination.PRIORITY
    return ChatDestination.DEFAULT
