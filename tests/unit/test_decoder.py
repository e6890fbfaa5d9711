"""Unit tests for EventDecoder — variant selection, envelopes, diagnostics."""

from __future__ import annotations

import json

import pytest

from herald.core.decoder import DecodeError, EventDecoder, format_path
from herald.models.events import (
    DiskSpaceAlarmEvent,
    ExportStatusEvent,
    IdentityProviderEvent,
    ImageScanEvent,
    MaintenanceEvent,
)


@pytest.fixture
def decoder() -> EventDecoder:
    return EventDecoder()


class TestDirectPayloads:
    def test_image_scan(self, decoder, make_image_scan, to_bytes):
        event = decoder.decode(to_bytes(make_image_scan()))
        assert isinstance(event, ImageScanEvent)

    def test_maintenance(self, decoder, to_bytes):
        event = decoder.decode(to_bytes({"success": False}))
        assert isinstance(event, MaintenanceEvent)
        assert event.success is False

    def test_accepts_str_input(self, decoder):
        assert isinstance(decoder.decode('{"success": true}'), MaintenanceEvent)


class TestEnvelopedPayloads:
    def test_export_status_via_sns(self, decoder, make_export_status, sns_envelope, to_bytes):
        event = decoder.decode(to_bytes(sns_envelope(make_export_status())))
        assert isinstance(event, ExportStatusEvent)
        assert event.success_details.consignment_reference == "TDR-2024-ABCD"

    def test_export_status_via_sqs(self, decoder, make_export_status, sqs_envelope, to_bytes):
        event = decoder.decode(to_bytes(sqs_envelope(make_export_status())))
        assert isinstance(event, ExportStatusEvent)

    def test_identity_provider(self, decoder, make_identity_provider, sns_envelope, to_bytes):
        event = decoder.decode(to_bytes(sns_envelope(make_identity_provider())))
        assert isinstance(event, IdentityProviderEvent)

    def test_disk_space_alarm(self, decoder, make_disk_space_alarm, sns_envelope, to_bytes):
        event = decoder.decode(to_bytes(sns_envelope(make_disk_space_alarm())))
        assert isinstance(event, DiskSpaceAlarmEvent)

    def test_maintenance_is_not_unwrapped(self, decoder, sns_envelope, to_bytes):
        """Maintenance events are only recognised when delivered directly."""
        with pytest.raises(DecodeError):
            decoder.decode(to_bytes(sns_envelope({"success": False})))


class TestDecodeFailures:
    def test_invalid_json(self, decoder):
        with pytest.raises(DecodeError, match="Invalid JSON") as excinfo:
            decoder.decode(b"not json {{{")
        assert excinfo.value.path == ()
        assert excinfo.value.attempts == ()

    def test_invalid_utf8(self, decoder):
        with pytest.raises(DecodeError, match="UTF-8"):
            decoder.decode(b"\xff\xfe\x00")

    def test_unknown_shape_records_every_attempt(self, decoder, to_bytes):
        with pytest.raises(DecodeError) as excinfo:
            decoder.decode(to_bytes({"hello": "world"}))
        names = [attempt.decoder for attempt in excinfo.value.attempts]
        assert names == [
            "image_scan",
            "maintenance",
            "export_status",
            "identity_provider",
            "disk_space_alarm",
        ]

    def test_malformed_inner_json_is_an_error(self, decoder, sns_envelope, to_bytes):
        with pytest.raises(DecodeError) as excinfo:
            decoder.decode(to_bytes(sns_envelope("{not json")))
        assert excinfo.value.path == ("Records", 0, "Sns", "Message")

    def test_deepest_failure_path_is_reported(
        self, decoder, make_export_status, sns_envelope, to_bytes
    ):
        inner = make_export_status()
        del inner["successDetails"]["exportBucket"]
        with pytest.raises(DecodeError) as excinfo:
            decoder.decode(to_bytes(sns_envelope(inner)))
        assert excinfo.value.path == (
            "Records",
            0,
            "Sns",
            "Message",
            "successDetails",
            "exportBucket",
        )
        assert "successDetails.exportBucket" in str(excinfo.value)

    def test_empty_records(self, decoder, to_bytes):
        with pytest.raises(DecodeError):
            decoder.decode(to_bytes({"Records": []}))


class TestDecodeIdempotence:
    def test_same_bytes_decode_to_equal_events(
        self, decoder, make_disk_space_alarm, sns_envelope, to_bytes
    ):
        raw = to_bytes(sns_envelope(make_disk_space_alarm()))
        assert decoder.decode(raw) == decoder.decode(raw)

    def test_decoding_does_not_mutate_input(self, decoder, make_image_scan):
        payload = make_image_scan()
        raw = json.dumps(payload)
        decoder.decode(raw)
        assert json.loads(raw) == payload


def test_format_path():
    assert format_path(("Records", 0, "body")) == "Records.0.body"
    assert format_path(()) == "<root>"
