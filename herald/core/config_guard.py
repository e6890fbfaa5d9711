"""Startup configuration guard — checks destinations before anything is sent.

The guard runs once when the processor is built and fails hard (raises
``ConfigurationError``) if a production deployment is missing a destination
it would need.  Outside production every check is skipped so local runs and
tests can leave destinations empty.
"""

from __future__ import annotations

import logging

from herald.config import TRANSFORM_ENGINE_TOPIC_KEY, HeraldConfig

logger = logging.getLogger(__name__)

# Config fields that must be non-empty in production.
PRODUCTION_REQUIRED_DESTINATIONS: tuple[str, ...] = (
    "chat_webhook_url",
    "chat_judgment_webhook_url",
    "chat_export_webhook_url",
    "chat_priority_webhook_url",
    "email_to",
)

# ``topic_arns`` keys that must be configured in production.
PRODUCTION_REQUIRED_TOPIC_KEYS: tuple[str, ...] = (TRANSFORM_ENGINE_TOPIC_KEY,)


class ConfigurationError(RuntimeError):
    """Raised when the configuration cannot safely serve notifications.

    It must not be caught and ignored; the process should exit.
    """


def find_violations(config: HeraldConfig) -> list[str]:
    """Return every production constraint *config* breaks (empty when healthy)."""
    if not config.is_production:
        return []

    violations: list[str] = []

    if config.debug:
        violations.append(
            "debug=True is not allowed in production. Set HERALD_DEBUG=false."
        )

    for field in PRODUCTION_REQUIRED_DESTINATIONS:
        if not getattr(config, field):
            violations.append(
                f"Destination '{field}' is required in production but not configured. "
                f"Set HERALD_{field.upper()}."
            )

    for key in PRODUCTION_REQUIRED_TOPIC_KEYS:
        if not config.topic_arns.get(key):
            violations.append(
                f"Topic '{key}' is required in production but not configured. "
                "Add it to HERALD_TOPIC_ARNS."
            )

    if config.channel_timeout_seconds <= 0:
        violations.append("channel_timeout_seconds must be positive.")

    return violations


def enforce_destination_constraints(config: HeraldConfig) -> None:
    """Raise :class:`ConfigurationError` listing every violation at once."""
    violations = find_violations(config)
    if violations:
        msg = "Configuration guard failed.\n" + "\n".join(f"  - {v}" for v in violations)
        logger.critical(msg)
        raise ConfigurationError(msg)

    if config.is_production:
        logger.info("Configuration guard passed.")
