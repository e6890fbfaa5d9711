"""Herald data models — all Pydantic v2, all frozen (immutable)."""

from herald.models.events import (
    EVENT_TYPE_MAP,
    AlarmDimension,
    AlarmTrigger,
    DiskSpaceAlarmEvent,
    Event,
    EventKind,
    ExportStatusEvent,
    ExportSuccessDetails,
    IdentityProviderEvent,
    ImageScanDetail,
    ImageScanEvent,
    MaintenanceEvent,
)
from herald.models.findings import (
    REPORTED_SEVERITIES,
    Finding,
    FindingSeverity,
    ScanReport,
)
from herald.models.messages import (
    CHANNEL_ORDER,
    ChannelKind,
    ChatBlock,
    ChatMessage,
    ChatText,
    EmailMessage,
    Message,
    MessageSet,
    QueueMessage,
    TopicMessage,
)
from herald.models.results import (
    NO_MESSAGES_SENT,
    ChannelOutcome,
    ChannelStatus,
    DispatchResult,
)

__all__ = [
    # events
    "EventKind",
    "Event",
    "EVENT_TYPE_MAP",
    "ImageScanDetail",
    "ImageScanEvent",
    "ExportSuccessDetails",
    "ExportStatusEvent",
    "IdentityProviderEvent",
    "AlarmDimension",
    "AlarmTrigger",
    "DiskSpaceAlarmEvent",
    "MaintenanceEvent",
    # findings
    "FindingSeverity",
    "REPORTED_SEVERITIES",
    "Finding",
    "ScanReport",
    # messages
    "ChannelKind",
    "CHANNEL_ORDER",
    "ChatText",
    "ChatBlock",
    "ChatMessage",
    "EmailMessage",
    "QueueMessage",
    "TopicMessage",
    "Message",
    "MessageSet",
    # results
    "NO_MESSAGES_SENT",
    "ChannelStatus",
    "ChannelOutcome",
    "DispatchResult",
]
