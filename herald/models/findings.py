"""Image scan findings, the enrichment context for image scan events."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class FindingSeverity(str, Enum):
    """Severity levels reported by the container registry scanner."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    INFORMATIONAL = "INFORMATIONAL"
    UNDEFINED = "UNDEFINED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value: object) -> FindingSeverity:
        if isinstance(value, str):
            upper = value.strip().upper()
            for member in cls:
                if member.value == upper:
                    return member
        return cls.UNKNOWN


# Severities reported in notifications, in display order.
REPORTED_SEVERITIES: tuple[FindingSeverity, ...] = (
    FindingSeverity.CRITICAL,
    FindingSeverity.HIGH,
    FindingSeverity.MEDIUM,
    FindingSeverity.LOW,
    FindingSeverity.UNDEFINED,
)


class Finding(BaseModel):
    """A single vulnerability reported for an image."""

    model_config = ConfigDict(frozen=True)

    name: str
    severity: FindingSeverity

    @field_validator("severity", mode="before")
    @classmethod
    def _coerce_severity(cls, value: object) -> FindingSeverity:
        return FindingSeverity(value)


class ScanReport(BaseModel):
    """Ordered findings for one image digest, built fresh per invocation."""

    model_config = ConfigDict(frozen=True)

    findings: tuple[Finding, ...] = ()

    def without(self, names: Iterable[str]) -> ScanReport:
        """Return a copy with every finding whose name is in *names* removed."""
        muted = frozenset(names)
        return ScanReport(
            findings=tuple(f for f in self.findings if f.name not in muted)
        )

    def count(self, severity: FindingSeverity) -> int:
        return sum(1 for finding in self.findings if finding.severity == severity)

    @property
    def severities(self) -> frozenset[FindingSeverity]:
        return frozenset(finding.severity for finding in self.findings)

    def counts(self) -> dict[FindingSeverity, int]:
        """Return counts for every reported severity, zeros included."""
        return {severity: self.count(severity) for severity in REPORTED_SEVERITIES}
