"""Shared test fixtures for Herald."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable, Sequence
from types import SimpleNamespace
from typing import Any

import pytest

from herald.config import HeraldConfig
from herald.core.decoder import EventDecoder
from herald.core.processor import NotificationProcessor
from herald.core.rules import build_rule_registry
from herald.models.findings import Finding
from herald.routing.dispatcher import ChannelDispatcher

DEFAULT_WEBHOOK = "https://chat.test/default"
JUDGMENT_WEBHOOK = "https://chat.test/judgment"
EXPORT_WEBHOOK = "https://chat.test/export"
PRIORITY_WEBHOOK = "https://chat.test/priority"
TRANSFORM_ENGINE_ARN = "arn:aws:sns:eu-west-2:123456789012:transform-engine-v2-in"


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class RecordingChannel:
    """Stands in for any of the four channel clients.

    Records every call; optionally sleeps, then fails with ``fail_with``.
    """

    def __init__(self, message_id: str = "msg-1") -> None:
        self.message_id = message_id
        self.calls: list[tuple[Any, ...]] = []
        self.fail_with: BaseException | None = None
        self.delay = 0.0

    async def _record(self, *args: Any) -> str:
        self.calls.append(args)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        return self.message_id

    async def post(self, url: str, payload: dict[str, Any]) -> str:
        return await self._record(url, payload)

    async def send(self, *args: Any) -> str:
        return await self._record(*args)

    async def publish(self, topic_arn: str, body: str) -> str:
        return await self._record(topic_arn, body)


class FakeFindingsLookup:
    """Returns canned findings, or raises ``error`` when set."""

    def __init__(self, findings: Sequence[Finding] = ()) -> None:
        self.findings_to_return = list(findings)
        self.error: BaseException | None = None
        self.calls: list[tuple[str, str]] = []

    async def findings(self, repository: str, image_digest: str) -> list[Finding]:
        self.calls.append((repository, image_digest))
        if self.error is not None:
            raise self.error
        return self.findings_to_return


# ---------------------------------------------------------------------------
# Configuration and wiring
# ---------------------------------------------------------------------------


@pytest.fixture
def make_config() -> Callable[..., HeraldConfig]:
    """Factory fixture: a fully configured HeraldConfig, ignoring .env files."""

    def _factory(**overrides: Any) -> HeraldConfig:
        defaults: dict[str, Any] = {
            "environment": "development",
            "chat_webhook_url": DEFAULT_WEBHOOK,
            "chat_judgment_webhook_url": JUDGMENT_WEBHOOK,
            "chat_export_webhook_url": EXPORT_WEBHOOK,
            "chat_priority_webhook_url": PRIORITY_WEBHOOK,
            "email_from": "scanresults@example.com",
            "email_to": "team@example.com",
            "topic_arns": {"transform_engine_v2_in": TRANSFORM_ENGINE_ARN},
            "muted_vulnerabilities": "",
            "channel_timeout_seconds": 1.0,
        }
        defaults.update(overrides)
        return HeraldConfig(_env_file=None, **defaults)

    return _factory


@pytest.fixture
def destinations() -> SimpleNamespace:
    """The addresses configured by ``make_config``."""
    return SimpleNamespace(
        default=DEFAULT_WEBHOOK,
        judgment=JUDGMENT_WEBHOOK,
        export=EXPORT_WEBHOOK,
        priority=PRIORITY_WEBHOOK,
        transform_engine_arn=TRANSFORM_ENGINE_ARN,
    )


@pytest.fixture
def herald_config(make_config) -> HeraldConfig:
    return make_config()


@pytest.fixture
def channels() -> SimpleNamespace:
    """One recording double per channel."""
    return SimpleNamespace(
        chat=RecordingChannel("ok"),
        email=RecordingChannel("email-0001"),
        queue=RecordingChannel("queue-0001"),
        topic=RecordingChannel("topic-0001"),
    )


@pytest.fixture
def findings_lookup() -> FakeFindingsLookup:
    return FakeFindingsLookup()


@pytest.fixture
def make_processor(channels, findings_lookup) -> Callable[..., NotificationProcessor]:
    """Factory fixture: a processor wired to the recording channels."""

    def _factory(config: HeraldConfig) -> NotificationProcessor:
        dispatcher = ChannelDispatcher(
            config,
            chat=channels.chat,
            email=channels.email,
            queue=channels.queue,
            topic=channels.topic,
        )
        return NotificationProcessor(
            EventDecoder(), build_rule_registry(config, findings_lookup), dispatcher
        )

    return _factory


@pytest.fixture
def processor(make_processor, herald_config) -> NotificationProcessor:
    return make_processor(herald_config)


# ---------------------------------------------------------------------------
# Payload factories shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_image_scan() -> Callable[..., dict[str, Any]]:
    """Factory fixture: a direct image scan event payload."""

    def _factory(
        repository: str = "yara-dependencies",
        tags: Sequence[str] = ("latest",),
        image_digest: str = "sha256:0123abcd",
    ) -> dict[str, Any]:
        return {
            "detail": {
                "scan-status": "COMPLETE",
                "repository-name": repository,
                "image-digest": image_digest,
                "image-tags": list(tags),
            }
        }

    return _factory


@pytest.fixture
def make_export_status() -> Callable[..., dict[str, Any]]:
    """Factory fixture: an export status event (inner message, not enveloped)."""

    def _factory(
        environment: str = "staging",
        success: bool = True,
        consignment_id: str = "c6f8b5a4-0000-4b3e-9f43-3d1f0e8b5c11",
        consignment_type: str | None = "standard",
        transferring_body: str = "Some Department",
        failure_cause: str | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "consignmentId": consignment_id,
            "environment": environment,
            "success": success,
        }
        if consignment_type is not None:
            payload["successDetails"] = {
                "userId": "u-1",
                "consignmentReference": "TDR-2024-ABCD",
                "transferringBodyName": transferring_body,
                "consignmentType": consignment_type,
                "exportBucket": "tdr-consignment-export",
            }
        if failure_cause is not None:
            payload["failureCause"] = failure_cause
        return payload

    return _factory


@pytest.fixture
def make_identity_provider() -> Callable[..., dict[str, Any]]:
    def _factory(environment: str = "prod", message: str = "Login failure") -> dict[str, Any]:
        return {"tdrEnv": environment, "message": message}

    return _factory


@pytest.fixture
def make_disk_space_alarm() -> Callable[..., dict[str, Any]]:
    """Factory fixture: a disk space alarm (inner message, not enveloped)."""

    def _factory(
        alarm_name: str = "tdr-jenkins-disk-space-alarm-mgmt",
        state: str = "ALARM",
        reason: str = "Threshold Crossed: 1 datapoint [75.2] was greater than the threshold (70.0).",
        server_name: str | None = "Jenkins",
        threshold: float = 70.0,
    ) -> dict[str, Any]:
        dimensions = [{"name": "path", "value": "/"}]
        if server_name is not None:
            dimensions.append({"name": "server_name", "value": server_name})
        return {
            "AlarmName": alarm_name,
            "NewStateValue": state,
            "NewStateReason": reason,
            "Trigger": {"Dimensions": dimensions, "Threshold": threshold},
        }

    return _factory


@pytest.fixture
def sns_envelope() -> Callable[[Any], dict[str, Any]]:
    """Wrap an inner payload the way the notification service delivers it."""

    def _wrap(inner: Any) -> dict[str, Any]:
        message = inner if isinstance(inner, str) else json.dumps(inner)
        return {"Records": [{"EventSource": "aws:sns", "Sns": {"Message": message}}]}

    return _wrap


@pytest.fixture
def sqs_envelope() -> Callable[[Any], dict[str, Any]]:
    """Wrap an inner payload as a queue record."""

    def _wrap(inner: Any) -> dict[str, Any]:
        body = inner if isinstance(inner, str) else json.dumps(inner)
        return {"Records": [{"eventSource": "aws:sqs", "body": body}]}

    return _wrap


def encode(payload: Any) -> bytes:
    return json.dumps(payload).encode("utf-8")


@pytest.fixture
def to_bytes() -> Callable[[Any], bytes]:
    return encode
