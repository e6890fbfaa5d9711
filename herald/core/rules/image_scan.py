"""Image scan rules — alert on vulnerable images that are actually deployed."""

from __future__ import annotations

import html
import logging
from collections.abc import Iterable
from typing import ClassVar

from herald.core.enrichment import FindingsLookup, ScanFindingsEnricher
from herald.models.events import EventKind, ImageScanEvent
from herald.models.findings import REPORTED_SEVERITIES, FindingSeverity, ScanReport
from herald.models.messages import ChatMessage, EmailMessage, QueueMessage, TopicMessage

logger = logging.getLogger(__name__)

# Tags set on deployed images.  Other tags (version tags, branch builds)
# belong to old or not-yet-deployed images and are ignored.
RELEASE_TAGS: frozenset[str] = frozenset({"latest", "intg", "staging", "prod", "mgmt"})

RELEVANT_SEVERITIES: frozenset[FindingSeverity] = frozenset(REPORTED_SEVERITIES)

DOCUMENTATION_MESSAGE = (
    "See the TDR developer manual for guidance on fixing these vulnerabilities: "
    "https://github.com/nationalarchives/tdr-dev-documentation/blob/master/manual/alerts/ecr-scans.md"
)


class ImageScanRules:
    """Chat and email alerts for image scan results.

    Notifications go out only when the image carries a release tag and at
    least one non-muted finding has a relevant severity.  Both messages
    report the per-severity counts of the non-muted findings.
    """

    event_kind: ClassVar[EventKind] = EventKind.IMAGE_SCAN

    def __init__(
        self,
        lookup: FindingsLookup,
        *,
        muted_vulnerabilities: Iterable[str] = (),
        email_from: str,
        email_to: str,
    ) -> None:
        self._enricher = ScanFindingsEnricher(lookup)
        self.muted_vulnerabilities = frozenset(muted_vulnerabilities)
        self._email_from = email_from
        self._email_to = email_to

    async def enrich(self, event: ImageScanEvent) -> ScanReport:
        return await self._enricher.enrich(event)

    # ------------------------------------------------------------------
    # Gating
    # ------------------------------------------------------------------

    def filter_report(self, report: ScanReport) -> ScanReport:
        return report.without(self.muted_vulnerabilities)

    def should_notify(self, event: ImageScanEvent, report: ScanReport) -> bool:
        if not RELEASE_TAGS.intersection(event.tags):
            return False
        return bool(RELEVANT_SEVERITIES & report.severities)

    # ------------------------------------------------------------------
    # Channels
    # ------------------------------------------------------------------

    def chat(self, event: ImageScanEvent, report: ScanReport) -> ChatMessage | None:
        filtered = self.filter_report(report)
        if not self.should_notify(event, filtered):
            logger.info(
                "No image scan notification for %s (tags=%s)",
                event.repository,
                ",".join(event.tags),
            )
            return None

        texts = [f"*ECR image scan complete on image {event.repository} {','.join(event.tags)}*"]
        texts.extend(
            f"{count} {severity.value.lower()} severity vulnerabilities"
            for severity, count in filtered.counts().items()
        )
        texts.append(DOCUMENTATION_MESSAGE)
        return ChatMessage.from_texts(*texts)

    def email(self, event: ImageScanEvent, report: ScanReport) -> EmailMessage | None:
        filtered = self.filter_report(report)
        if not self.should_notify(event, filtered):
            return None

        return EmailMessage(
            sender=self._email_from,
            to=self._email_to,
            subject=f"ECR scan results for {event.repository}",
            html_body=_render_email(event.repository, filtered),
        )

    def queue(self, event: ImageScanEvent, report: ScanReport) -> QueueMessage | None:
        return None

    def topic(self, event: ImageScanEvent, report: ScanReport) -> TopicMessage | None:
        return None


def _render_email(repository: str, report: ScanReport) -> str:
    counts = "".join(
        f"<p>{count} {severity.value.lower()} vulnerabilities</p>"
        for severity, count in report.counts().items()
    )
    return (
        "<html><body>"
        f"<h1>Image scan results for {html.escape(repository)}</h1>"
        f"<div>{counts}</div>"
        f"<div><p>{html.escape(DOCUMENTATION_MESSAGE)}</p></div>"
        "</body></html>"
    )
