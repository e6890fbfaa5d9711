"""Disk space alarm rules for the build servers."""

from __future__ import annotations

import logging
from typing import ClassVar

from herald.core.rules.base import ChatOnlyRules
from herald.models.events import DiskSpaceAlarmEvent, EventKind
from herald.models.messages import ChatMessage

logger = logging.getLogger(__name__)

KNOWN_ALARMS: frozenset[str] = frozenset(
    {
        "tdr-jenkins-disk-space-alarm-mgmt",
        "tdr-jenkins-prod-disk-space-alarm-mgmt",
    }
)
SERVER_NAME_DIMENSION = "server_name"
NO_DATA_REASON = "no datapoints were received"

DASHBOARD_MESSAGE = (
    "See <https://grafana.tdr-management.nationalarchives.gov.uk/d/eDVRAnI7z/jenkins-disk-space"
    "|this Grafana dashboard> to see the data"
)
REMEDIATION_MESSAGE = (
    "See <https://github.com/nationalarchives/tdr-dev-documentation/blob/master/manual/"
    "clear-jenkins-disk-space.md|the dev documentation> for details of how to clear disk space"
)


class DiskSpaceRules(ChatOnlyRules):
    event_kind: ClassVar[EventKind] = EventKind.DISK_SPACE_ALARM

    def chat(self, event: DiskSpaceAlarmEvent, context: None) -> ChatMessage | None:
        if event.alarm_name not in KNOWN_ALARMS:
            logger.info("Ignoring unknown alarm %s", event.alarm_name)
            return None

        server_name = event.dimension(SERVER_NAME_DIMENSION)
        if server_name is None:
            logger.info("Alarm %s has no %s dimension", event.alarm_name, SERVER_NAME_DIMENSION)
            return None

        threshold = _format_threshold(event.threshold)
        if event.new_state == "OK":
            return ChatMessage.from_texts(
                f":white_check_mark: {server_name} disk space is now below {threshold} percent",
                DASHBOARD_MESSAGE,
            )
        if NO_DATA_REASON in event.new_state_reason:
            return ChatMessage.from_texts(
                f":warning: {server_name} is not sending disk space data to Cloudwatch. "
                "This is most likely because Jenkins is restarting.",
                DASHBOARD_MESSAGE,
            )
        return ChatMessage.from_texts(
            f":warning: {server_name} disk space is over {threshold} percent",
            DASHBOARD_MESSAGE,
            REMEDIATION_MESSAGE,
        )


def _format_threshold(threshold: float) -> str:
    if threshold.is_integer():
        return str(int(threshold))
    return str(threshold)
