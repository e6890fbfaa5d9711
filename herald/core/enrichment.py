"""Context enrichment — per-invocation lookups that feed the rule engine.

Enrichment runs at most once per invocation, before any rule is evaluated.
Image scan events fetch their findings from the container registry; every
other event type needs no context and enriches to ``None`` without I/O.
A failed lookup aborts the invocation: no partial notifications are sent.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from herald.models.events import ImageScanEvent
from herald.models.findings import Finding, ScanReport

logger = logging.getLogger(__name__)


class EnrichmentError(RuntimeError):
    """Raised when the context for an event cannot be fetched."""


@runtime_checkable
class FindingsLookup(Protocol):
    """The registry call that returns scan findings for an image digest."""

    async def findings(self, repository: str, image_digest: str) -> Sequence[Finding]:
        ...


@runtime_checkable
class Enricher(Protocol):
    async def enrich(self, event: Any) -> Any:
        ...


class NoEnrichment:
    """Unit context: succeeds immediately with ``None``."""

    async def enrich(self, event: Any) -> None:
        return None


class ScanFindingsEnricher:
    """Builds a :class:`ScanReport` for an image scan event."""

    def __init__(self, lookup: FindingsLookup) -> None:
        self._lookup = lookup

    async def enrich(self, event: ImageScanEvent) -> ScanReport:
        try:
            findings = await self._lookup.findings(event.repository, event.image_digest)
        except Exception as exc:
            raise EnrichmentError(
                f"Failed to fetch scan findings for {event.repository}@{event.image_digest}: {exc}"
            ) from exc

        report = ScanReport(findings=tuple(findings))
        logger.debug(
            "Fetched %d findings for %s@%s",
            len(report.findings),
            event.repository,
            event.image_digest,
        )
        return report
