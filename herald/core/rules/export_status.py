"""Export status rules — chat on export outcomes, hand off completed bags."""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from typing import ClassVar

from herald.config import TRANSFORM_ENGINE_TOPIC_KEY
from herald.core.rules.base import ChatOnlyRules
from herald.models.events import EventKind, ExportStatusEvent
from herald.models.messages import ChatMessage, TopicMessage

logger = logging.getLogger(__name__)

BAG_AVAILABLE_MESSAGE_TYPE = "uk.gov.nationalarchives.da.messages.bag.available.BagAvailable"
EXPORT_FUNCTION_NAME = "tdr-export-process"
PRODUCER = "TDR"
MOCK_BODY_PREFIX = "Mock"


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return str(uuid.uuid4())


class ExportStatusRules(ChatOnlyRules):
    """Chat on every export outcome except successful intg exports.

    Successful exports of real (non-mock) transferring bodies also publish
    a "bag available" message for the downstream transformation engine.
    """

    event_kind: ClassVar[EventKind] = EventKind.EXPORT_STATUS

    def __init__(
        self,
        *,
        clock: Callable[[], str] = _utc_now,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._clock = clock
        self._id_factory = id_factory

    def chat(self, event: ExportStatusEvent, context: None) -> ChatMessage | None:
        if event.environment == "intg" and event.success:
            logger.info(
                "Skipping chat for successful intg export of consignment %s",
                event.consignment_id,
            )
            return None

        if event.success:
            headline = f":white_check_mark: Export *success* on *{event.environment}!* \n"
        else:
            headline = f":x: Export *failure* on *{event.environment}!* \n"

        text = f"{headline}*Consignment ID:* {event.consignment_id}{_detail_lines(event)}"
        return ChatMessage.from_texts(text)

    def topic(self, event: ExportStatusEvent, context: None) -> TopicMessage | None:
        details = event.success_details
        if not event.success or details is None:
            return None
        if details.transferring_body_name.startswith(MOCK_BODY_PREFIX):
            logger.info(
                "Not publishing bag for mock transferring body on consignment %s",
                event.consignment_id,
            )
            return None

        reference = details.consignment_reference
        body = {
            "properties": {
                "messageId": self._id_factory(),
                "parentMessageId": None,
                "executionId": self._id_factory(),
                "parentExecutionId": None,
                "messageType": BAG_AVAILABLE_MESSAGE_TYPE,
                "timestamp": self._clock(),
                "function": EXPORT_FUNCTION_NAME,
                "producer": PRODUCER,
            },
            "parameters": {
                "reference": reference,
                "originator": PRODUCER,
                "consignmentType": details.consignment_type,
                "s3Bucket": details.export_bucket,
                "s3BagKey": f"{reference}.tar.gz",
                "s3BagSha256Key": f"{reference}.tar.gz.sha256",
            },
        }
        return TopicMessage(topic_key=TRANSFORM_ENGINE_TOPIC_KEY, body=json.dumps(body))


def _detail_lines(event: ExportStatusEvent) -> str:
    details = event.success_details
    if details is not None:
        return (
            f"\n*User ID:* {details.user_id}"
            f"\n*Consignment Reference:* {details.consignment_reference}"
            f"\n*Transferring Body Name:* {details.transferring_body_name}"
        )
    if event.failure_cause is not None:
        return f"\n*Cause:* {event.failure_cause}"
    return ""
