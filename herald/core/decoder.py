"""Event decoder — turns an opaque inbound payload into exactly one typed event.

Inbound payloads are either a bare event object or a notification-service
envelope (SNS ``Records[0].Sns.Message`` or SQS ``Records[0].body``) whose
record carries the real event as an embedded JSON string.

Decoders are tried in a fixed priority order and the first match wins.
Each attempt validates the parsed payload into fresh frozen models and never
mutates it, so a failed attempt leaves nothing behind for the next one.
When every attempt fails, :class:`DecodeError` reports the deepest failing
field across all attempts.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, ValidationError

from herald.models.events import (
    DiskSpaceAlarmEvent,
    Event,
    ExportStatusEvent,
    IdentityProviderEvent,
    ImageScanEvent,
    MaintenanceEvent,
)

logger = logging.getLogger(__name__)

Path = tuple[str | int, ...]


class DecodeAttempt(BaseModel):
    """Why one decoder rejected the payload."""

    model_config = ConfigDict(frozen=True)

    decoder: str
    path: Path
    reason: str


class DecodeError(ValueError):
    """Raised when no known event schema matches the payload."""

    def __init__(
        self,
        message: str,
        *,
        path: Path = (),
        attempts: Sequence[DecodeAttempt] = (),
    ) -> None:
        super().__init__(message)
        self.path: Path = tuple(path)
        self.attempts: tuple[DecodeAttempt, ...] = tuple(attempts)


class EventSchema(NamedTuple):
    """One entry in the decoder priority list."""

    name: str
    model: type[BaseModel]
    enveloped: bool


# Direct schemas first: image scan and maintenance events are never wrapped.
DEFAULT_SCHEMAS: tuple[EventSchema, ...] = (
    EventSchema("image_scan", ImageScanEvent, enveloped=False),
    EventSchema("maintenance", MaintenanceEvent, enveloped=False),
    EventSchema("export_status", ExportStatusEvent, enveloped=True),
    EventSchema("identity_provider", IdentityProviderEvent, enveloped=True),
    EventSchema("disk_space_alarm", DiskSpaceAlarmEvent, enveloped=True),
)


class _AttemptFailed(Exception):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(reason)
        self.path = path
        self.reason = reason


def format_path(path: Path) -> str:
    return ".".join(str(part) for part in path) or "<root>"


class EventDecoder:
    """Decodes raw payloads into :data:`~herald.models.events.Event` values.

    Usage
    -----
    >>> decoder = EventDecoder()
    >>> event = decoder.decode(b'{"success": false}')
    >>> event.kind.value
    'maintenance'
    """

    def __init__(self, schemas: Sequence[EventSchema] = DEFAULT_SCHEMAS) -> None:
        self._schemas = tuple(schemas)

    def decode(self, raw: bytes | str) -> Event:
        """Decode *raw* into exactly one event or raise :class:`DecodeError`."""
        data = self._parse(raw)

        attempts: list[DecodeAttempt] = []
        for schema in self._schemas:
            try:
                event = self._attempt(schema, data)
            except _AttemptFailed as failure:
                attempts.append(
                    DecodeAttempt(decoder=schema.name, path=failure.path, reason=failure.reason)
                )
                continue
            logger.debug("Decoded payload as %s event", schema.name)
            return event  # type: ignore[return-value]

        deepest = max(attempts, key=lambda attempt: len(attempt.path))
        raise DecodeError(
            f"No known event schema matched the payload; deepest failure at "
            f"{format_path(deepest.path)} ({deepest.decoder}): {deepest.reason}",
            path=deepest.path,
            attempts=attempts,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse(raw: bytes | str) -> Any:
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise DecodeError(f"Payload is not valid UTF-8: {exc}") from exc
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"Invalid JSON: {exc}") from exc

    def _attempt(self, schema: EventSchema, data: Any) -> BaseModel:
        prefix: Path = ()
        payload = data
        if schema.enveloped:
            payload, prefix = unwrap_envelope(data)

        try:
            return schema.model.model_validate(payload)
        except ValidationError as exc:
            errors = exc.errors()
            worst = max(errors, key=lambda error: len(error["loc"]))
            raise _AttemptFailed(prefix + tuple(worst["loc"]), worst["msg"]) from exc


def unwrap_envelope(data: Any) -> tuple[Any, Path]:
    """Return the parsed inner event of a notification envelope and its path.

    Raises ``_AttemptFailed`` (internal) when *data* is not an envelope or
    the embedded message is not valid JSON.
    """
    if not isinstance(data, Mapping):
        raise _AttemptFailed((), "Envelope must be a JSON object")

    records = data.get("Records")
    if not isinstance(records, list):
        raise _AttemptFailed(("Records",), "Field required")
    if not records:
        raise _AttemptFailed(("Records",), "Envelope contains no records")

    record = records[0]
    if not isinstance(record, Mapping):
        raise _AttemptFailed(("Records", 0), "Record must be a JSON object")

    path: Path
    notification = record.get("Sns")
    if isinstance(notification, Mapping) and "Message" in notification:
        message, path = notification["Message"], ("Records", 0, "Sns", "Message")
    elif "body" in record:
        message, path = record["body"], ("Records", 0, "body")
    else:
        raise _AttemptFailed(("Records", 0, "Sns", "Message"), "Field required")

    if not isinstance(message, str):
        raise _AttemptFailed(path, "Embedded message must be a JSON string")

    try:
        return json.loads(message), path
    except json.JSONDecodeError as exc:
        raise _AttemptFailed(path, f"Embedded message is not valid JSON: {exc.msg}") from exc
