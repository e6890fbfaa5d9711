"""Integration tests — raw payload through decode, enrich, rules and dispatch.

Every scenario runs the real decoder, rule registry and dispatcher; only the
outbound clients and the findings lookup are replaced with recording doubles.
"""

from __future__ import annotations

import json

import pytest

from herald.core.decoder import DecodeError
from herald.models.findings import Finding
from herald.models.messages import ChannelKind
from herald.models.results import NO_MESSAGES_SENT, ChannelStatus
from herald.routing.dispatcher import ChannelSendError


class TestImageScanPipeline:
    def test_release_tag_with_low_finding(
        self, processor, channels, findings_lookup, make_image_scan, to_bytes, destinations
    ):
        findings_lookup.findings_to_return = [Finding(name="CVE-2024-1", severity="LOW")]

        result = processor.process(to_bytes(make_image_scan(tags=["latest"])))

        assert [o.channel for o in result.sent] == [ChannelKind.CHAT, ChannelKind.EMAIL]
        url, payload = channels.chat.calls[0]
        assert url == destinations.default
        texts = [block["text"]["text"] for block in payload["blocks"]]
        assert "1 low severity vulnerabilities" in texts
        assert "0 critical severity vulnerabilities" in texts
        sender, to, subject, html_body = channels.email.calls[0]
        assert to == "team@example.com"
        assert subject == "ECR scan results for yara-dependencies"
        assert "1 low vulnerabilities" in html_body

    def test_branch_tag_sends_nothing(
        self, processor, channels, findings_lookup, make_image_scan, to_bytes
    ):
        findings_lookup.findings_to_return = [Finding(name="CVE-1", severity="CRITICAL")]
        result = processor.process(to_bytes(make_image_scan(tags=["dev-branch"])))
        assert result.summary() == NO_MESSAGES_SENT
        assert channels.chat.calls == []
        assert channels.email.calls == []

    def test_muted_findings_send_nothing(
        self, make_config, make_processor, channels, findings_lookup, make_image_scan, to_bytes
    ):
        findings_lookup.findings_to_return = [
            Finding(name="CVE-1", severity="HIGH"),
            Finding(name="CVE-2", severity="LOW"),
        ]
        processor = make_processor(make_config(muted_vulnerabilities="CVE-1,CVE-2"))
        result = processor.process(to_bytes(make_image_scan(tags=["prod"])))
        assert result.nothing_sent


class TestExportStatusPipeline:
    def test_prod_judgment_success(
        self, processor, channels, make_export_status, sns_envelope, to_bytes, destinations
    ):
        payload = sns_envelope(make_export_status(environment="prod", consignment_type="judgment"))

        result = processor.process(to_bytes(payload))

        assert channels.chat.calls[0][0] == destinations.judgment
        assert result.outcome(ChannelKind.CHAT).destination == "judgment"
        topic_arn, body = channels.topic.calls[0]
        assert topic_arn == destinations.transform_engine_arn
        assert json.loads(body)["parameters"]["consignmentType"] == "judgment"
        assert result.outcome(ChannelKind.EMAIL).status is ChannelStatus.SKIPPED

    def test_intg_failure_reports_cause(
        self, processor, channels, make_export_status, sqs_envelope, to_bytes, destinations
    ):
        payload = sqs_envelope(
            make_export_status(
                environment="intg", success=False, consignment_type=None, failure_cause="X"
            )
        )
        processor.process(to_bytes(payload))
        url, chat_payload = channels.chat.calls[0]
        assert url == destinations.export
        assert "*Cause:* X" in chat_payload["blocks"][0]["text"]["text"]
        assert channels.topic.calls == []

    def test_topic_failure_still_posts_chat(
        self, processor, channels, make_export_status, sns_envelope, to_bytes
    ):
        channels.topic.fail_with = RuntimeError("SNS throttled")
        with pytest.raises(ChannelSendError, match="topic channel failed") as excinfo:
            processor.process(to_bytes(sns_envelope(make_export_status())))
        assert excinfo.value.result.outcome(ChannelKind.CHAT).status is ChannelStatus.SENT
        assert len(channels.chat.calls) == 1


class TestAlarmPipeline:
    def test_no_data_alarm(
        self, processor, channels, make_disk_space_alarm, sns_envelope, to_bytes
    ):
        alarm = make_disk_space_alarm(reason="no datapoints were received for 1 period")
        processor.process(to_bytes(sns_envelope(alarm)))
        texts = [b["text"]["text"] for b in channels.chat.calls[0][1]["blocks"]]
        assert "is not sending disk space data" in texts[0]
        assert len(texts) == 2

    def test_unknown_alarm_sends_nothing(
        self, processor, channels, make_disk_space_alarm, sns_envelope, to_bytes
    ):
        alarm = make_disk_space_alarm(alarm_name="unrelated-alarm")
        result = processor.process(to_bytes(sns_envelope(alarm)))
        assert result.nothing_sent
        assert channels.chat.calls == []


class TestIdentityProviderPipeline:
    def test_prod_event_goes_to_priority_webhook(
        self, processor, channels, make_identity_provider, sns_envelope, to_bytes, destinations
    ):
        processor.process(to_bytes(sns_envelope(make_identity_provider("prod", "Brute force"))))
        url, payload = channels.chat.calls[0]
        assert url == destinations.priority
        assert payload["blocks"][0]["text"]["text"] == ":warning: Keycloak Event prod: Brute force"


class TestFatalErrors:
    def test_unmatched_payload_invokes_no_channel(self, processor, channels, to_bytes):
        with pytest.raises(DecodeError):
            processor.process(to_bytes({"Records": [{"Sns": {"Message": "{}"}}]}))
        for channel in (channels.chat, channels.email, channels.queue, channels.topic):
            assert channel.calls == []
