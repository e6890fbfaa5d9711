"""Decoding, enrichment, rules and the processor."""

from herald.core.config_guard import ConfigurationError, enforce_destination_constraints
from herald.core.decoder import DecodeAttempt, DecodeError, EventDecoder
from herald.core.enrichment import EnrichmentError, NoEnrichment, ScanFindingsEnricher
from herald.core.processor import NotificationProcessor

__all__ = [
    "ConfigurationError",
    "DecodeAttempt",
    "DecodeError",
    "EnrichmentError",
    "EventDecoder",
    "NoEnrichment",
    "NotificationProcessor",
    "ScanFindingsEnricher",
    "enforce_destination_constraints",
]
