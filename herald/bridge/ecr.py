"""Scan findings lookup backed by ECR."""

from __future__ import annotations

import logging
from typing import Any

from herald.bridge.aws import run_blocking
from herald.models.findings import Finding

logger = logging.getLogger(__name__)


class EcrFindingsLookup:
    """Fetches every scan finding for an image digest.

    Pages through ``describe_image_scan_findings`` so images with more
    findings than one response holds are reported in full.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    async def findings(self, repository: str, image_digest: str) -> list[Finding]:
        return await run_blocking(self._collect, repository, image_digest)

    def _collect(self, repository: str, image_digest: str) -> list[Finding]:
        paginator = self._client.get_paginator("describe_image_scan_findings")
        pages = paginator.paginate(
            repositoryName=repository,
            imageId={"imageDigest": image_digest},
        )
        findings: list[Finding] = []
        for page in pages:
            for raw in page.get("imageScanFindings", {}).get("findings", []):
                findings.append(
                    Finding(name=raw.get("name", ""), severity=raw.get("severity", "UNKNOWN"))
                )
        logger.debug("ECR returned %d findings for %s", len(findings), repository)
        return findings
