"""Per-channel outcomes for one invocation."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from herald.models.messages import CHANNEL_ORDER, ChannelKind

NO_MESSAGES_SENT = "No messages have been sent"


class ChannelStatus(str, Enum):
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


class ChannelOutcome(BaseModel):
    """Outcome of one channel send attempt.

    ``exception`` keeps the original error for diagnostics; it is excluded
    from serialisation.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    channel: ChannelKind
    status: ChannelStatus
    message_id: str | None = None
    error: str | None = None
    destination: str | None = None
    exception: BaseException | None = Field(default=None, exclude=True, repr=False)

    @classmethod
    def sent(
        cls, channel: ChannelKind, message_id: str, destination: str | None = None
    ) -> ChannelOutcome:
        return cls(
            channel=channel,
            status=ChannelStatus.SENT,
            message_id=message_id,
            destination=destination,
        )

    @classmethod
    def skipped(cls, channel: ChannelKind) -> ChannelOutcome:
        return cls(channel=channel, status=ChannelStatus.SKIPPED)

    @classmethod
    def failed(
        cls,
        channel: ChannelKind,
        exception: BaseException,
        destination: str | None = None,
    ) -> ChannelOutcome:
        return cls(
            channel=channel,
            status=ChannelStatus.FAILED,
            error=str(exception) or type(exception).__name__,
            destination=destination,
            exception=exception,
        )


class DispatchResult(BaseModel):
    """Aggregate of the four channel outcomes, in fixed channel order."""

    model_config = ConfigDict(frozen=True)

    outcomes: tuple[ChannelOutcome, ...] = Field(
        default_factory=lambda: tuple(ChannelOutcome.skipped(c) for c in CHANNEL_ORDER)
    )

    @classmethod
    def from_outcomes(cls, outcomes: dict[ChannelKind, ChannelOutcome]) -> DispatchResult:
        """Fold outcomes into channel order; absent channels count as skipped."""
        return cls(
            outcomes=tuple(
                outcomes.get(channel) or ChannelOutcome.skipped(channel)
                for channel in CHANNEL_ORDER
            )
        )

    def outcome(self, channel: ChannelKind) -> ChannelOutcome:
        for outcome in self.outcomes:
            if outcome.channel == channel:
                return outcome
        return ChannelOutcome.skipped(channel)

    @property
    def sent(self) -> list[ChannelOutcome]:
        return [o for o in self.outcomes if o.status == ChannelStatus.SENT]

    @property
    def failures(self) -> list[ChannelOutcome]:
        return [o for o in self.outcomes if o.status == ChannelStatus.FAILED]

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    @property
    def nothing_sent(self) -> bool:
        """True when no channel was attempted at all."""
        return all(o.status == ChannelStatus.SKIPPED for o in self.outcomes)

    @property
    def first_failure(self) -> ChannelOutcome | None:
        failures = self.failures
        return failures[0] if failures else None

    def summary(self) -> str:
        """Return a one-line description of what happened."""
        if self.nothing_sent:
            return NO_MESSAGES_SENT
        parts: list[str] = []
        for outcome in self.outcomes:
            if outcome.status == ChannelStatus.SENT:
                parts.append(f"{outcome.channel.value}: sent ({outcome.message_id})")
            elif outcome.status == ChannelStatus.FAILED:
                parts.append(f"{outcome.channel.value}: failed ({outcome.error})")
        return "; ".join(parts)

