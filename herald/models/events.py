"""Typed infrastructure events — the closed set the dispatcher understands.

Every event is a frozen Pydantic model decoded from inbound JSON.  Field
aliases mirror the wire names used by the publishing services, while the
Python attribute names stay descriptive.  Unknown wire fields are ignored.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class EventKind(str, Enum):
    """The five event types that can arrive at the dispatcher."""

    IMAGE_SCAN = "image_scan"
    EXPORT_STATUS = "export_status"
    IDENTITY_PROVIDER = "identity_provider"
    DISK_SPACE_ALARM = "disk_space_alarm"
    MAINTENANCE = "maintenance"


class _EventModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


# ---------------------------------------------------------------------------
# Image scan (delivered directly by the registry's event bus)
# ---------------------------------------------------------------------------


class ImageScanDetail(_EventModel):
    repository: str = Field(alias="repository-name")
    image_digest: str = Field(alias="image-digest")
    tags: tuple[str, ...] = Field(default=(), alias="image-tags")
    scan_status: str | None = Field(default=None, alias="scan-status")
    finding_severity_counts: dict[str, int] = Field(
        default_factory=dict, alias="finding-severity-counts"
    )


class ImageScanEvent(_EventModel):
    """A completed container image scan."""

    kind: ClassVar[EventKind] = EventKind.IMAGE_SCAN

    detail: ImageScanDetail

    @property
    def repository(self) -> str:
        return self.detail.repository

    @property
    def image_digest(self) -> str:
        return self.detail.image_digest

    @property
    def tags(self) -> tuple[str, ...]:
        return self.detail.tags


# ---------------------------------------------------------------------------
# Export pipeline status
# ---------------------------------------------------------------------------


class ExportSuccessDetails(_EventModel):
    """Extra detail published alongside a successful export."""

    user_id: str = Field(alias="userId")
    consignment_reference: str = Field(alias="consignmentReference")
    transferring_body_name: str = Field(alias="transferringBodyName")
    consignment_type: str = Field(alias="consignmentType")
    export_bucket: str = Field(alias="exportBucket")


class ExportStatusEvent(_EventModel):
    """Outcome of one consignment export."""

    kind: ClassVar[EventKind] = EventKind.EXPORT_STATUS

    consignment_id: str = Field(alias="consignmentId")
    environment: str
    success: StrictBool
    success_details: ExportSuccessDetails | None = Field(default=None, alias="successDetails")
    failure_cause: str | None = Field(default=None, alias="failureCause")


# ---------------------------------------------------------------------------
# Identity provider
# ---------------------------------------------------------------------------


class IdentityProviderEvent(_EventModel):
    """A notable event raised by the identity provider (Keycloak)."""

    kind: ClassVar[EventKind] = EventKind.IDENTITY_PROVIDER

    environment: str = Field(alias="tdrEnv")
    message: str


# ---------------------------------------------------------------------------
# Disk space alarm (CloudWatch alarm state change)
# ---------------------------------------------------------------------------


class AlarmDimension(_EventModel):
    name: str
    value: str


class AlarmTrigger(_EventModel):
    dimensions: tuple[AlarmDimension, ...] = Field(default=(), alias="Dimensions")
    threshold: float = Field(alias="Threshold")


class DiskSpaceAlarmEvent(_EventModel):
    """A disk space alarm changing state."""

    kind: ClassVar[EventKind] = EventKind.DISK_SPACE_ALARM

    alarm_name: str = Field(alias="AlarmName")
    new_state: str = Field(alias="NewStateValue")
    new_state_reason: str = Field(default="", alias="NewStateReason")
    trigger: AlarmTrigger = Field(alias="Trigger")

    @property
    def dimensions(self) -> tuple[AlarmDimension, ...]:
        return self.trigger.dimensions

    @property
    def threshold(self) -> float:
        return self.trigger.threshold

    def dimension(self, name: str) -> str | None:
        """Return the value of the named dimension, or ``None`` when absent."""
        for dimension in self.trigger.dimensions:
            if dimension.name == name:
                return dimension.value
        return None


# ---------------------------------------------------------------------------
# Maintenance job outcome
# ---------------------------------------------------------------------------


class MaintenanceEvent(_EventModel):
    """Outcome of a scheduled maintenance (backup) job."""

    kind: ClassVar[EventKind] = EventKind.MAINTENANCE

    success: StrictBool


Event = Union[
    ImageScanEvent,
    ExportStatusEvent,
    IdentityProviderEvent,
    DiskSpaceAlarmEvent,
    MaintenanceEvent,
]

EVENT_TYPE_MAP: dict[EventKind, type[BaseModel]] = {
    EventKind.IMAGE_SCAN: ImageScanEvent,
    EventKind.EXPORT_STATUS: ExportStatusEvent,
    EventKind.IDENTITY_PROVIDER: IdentityProviderEvent,
    EventKind.DISK_SPACE_ALARM: DiskSpaceAlarmEvent,
    EventKind.MAINTENANCE: MaintenanceEvent,
}
