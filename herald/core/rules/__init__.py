"""Per-event-type rule strategies and the registry that selects them."""

from __future__ import annotations

from herald.config import HeraldConfig
from herald.core.enrichment import FindingsLookup
from herald.core.rules.base import ChatOnlyRules, NotificationRules, derive_messages
from herald.core.rules.disk_space import DiskSpaceRules
from herald.core.rules.export_status import ExportStatusRules
from herald.core.rules.identity_provider import IdentityProviderRules
from herald.core.rules.image_scan import ImageScanRules
from herald.core.rules.maintenance import MaintenanceRules
from herald.models.events import EventKind

RuleRegistry = dict[EventKind, NotificationRules]


def build_rule_registry(config: HeraldConfig, findings_lookup: FindingsLookup) -> RuleRegistry:
    """Return one strategy per event kind, configured from *config*."""
    strategies: list[NotificationRules] = [
        ImageScanRules(
            findings_lookup,
            muted_vulnerabilities=config.muted_vulnerability_names,
            email_from=config.email_from,
            email_to=config.email_to,
        ),
        ExportStatusRules(),
        IdentityProviderRules(),
        DiskSpaceRules(),
        MaintenanceRules(),
    ]
    return {strategy.event_kind: strategy for strategy in strategies}


__all__ = [
    "ChatOnlyRules",
    "DiskSpaceRules",
    "ExportStatusRules",
    "IdentityProviderRules",
    "ImageScanRules",
    "MaintenanceRules",
    "NotificationRules",
    "RuleRegistry",
    "build_rule_registry",
    "derive_messages",
]
