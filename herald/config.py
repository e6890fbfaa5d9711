"""Runtime configuration — env-driven, loaded once per process.

Centralized config using pydantic-settings.  Reads from a .env file and
HERALD_* environment variables.  Destination URLs, keys and the mute list
are read-only for the lifetime of the process.
"""

from __future__ import annotations

from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class ChatDestination(str, Enum):
    """Logical chat webhooks an event can be routed to."""

    DEFAULT = "default"
    JUDGMENT = "judgment"
    EXPORT = "export"
    PRIORITY = "priority"


# Fields holding encrypted values when ``decrypt_secrets`` is enabled.
SECRET_FIELDS: tuple[str, ...] = (
    "muted_vulnerabilities",
    "email_to",
    "chat_webhook_url",
    "chat_judgment_webhook_url",
    "chat_export_webhook_url",
    "chat_priority_webhook_url",
)

# Topic used to hand finished exports to the transform engine.
TRANSFORM_ENGINE_TOPIC_KEY = "transform_engine_v2_in"

# ``topic_arns`` entries that are also encrypted.
SECRET_TOPIC_KEYS: tuple[str, ...] = (TRANSFORM_ENGINE_TOPIC_KEY,)


class HeraldConfig(BaseSettings):
    """Configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export HERALD_ENVIRONMENT=production
        export HERALD_CHAT_WEBHOOK_URL=https://hooks.slack.com/services/...
        export HERALD_TOPIC_ARNS='{"transform_engine_v2_in": "arn:aws:sns:..."}'
        export HERALD_MUTED_VULNERABILITIES=CVE-2023-0001,CVE-2023-0002
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="HERALD_",
        env_file_encoding="utf-8",
        frozen=True,
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # AWS clients
    aws_region: str = "eu-west-2"
    ses_endpoint: str | None = None
    sqs_endpoint: str | None = None
    sns_endpoint: str | None = None
    ecr_endpoint: str | None = None
    kms_endpoint: str | None = None

    # Chat webhooks
    chat_webhook_url: str = ""
    chat_judgment_webhook_url: str = ""
    chat_export_webhook_url: str = ""
    chat_priority_webhook_url: str = ""

    # Email
    email_from: str = "scanresults@tdr-management.nationalarchives.gov.uk"
    email_to: str = ""

    # Queue / topic destinations keyed by logical name
    queue_urls: dict[str, str] = {}
    topic_arns: dict[str, str] = {}

    # Image scan alerts
    muted_vulnerabilities: str = ""

    # Dispatch
    channel_timeout_seconds: float = 10.0

    # Secrets
    decrypt_secrets: bool = False
    function_name: str = "herald-notifications"

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"

    @property
    def muted_vulnerability_names(self) -> frozenset[str]:
        """The comma-separated mute list as a set of names."""
        return frozenset(
            name.strip() for name in self.muted_vulnerabilities.split(",") if name.strip()
        )

    @property
    def chat_webhooks(self) -> dict[ChatDestination, str]:
        return {
            ChatDestination.DEFAULT: self.chat_webhook_url,
            ChatDestination.JUDGMENT: self.chat_judgment_webhook_url,
            ChatDestination.EXPORT: self.chat_export_webhook_url,
            ChatDestination.PRIORITY: self.chat_priority_webhook_url,
        }


# Module-level singleton, import as `from herald.config import config`
config = HeraldConfig()
