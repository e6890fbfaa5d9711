"""Herald notification routing — delivers derived messages to every channel.

Each invocation produces at most one message per channel.  The
ChannelDispatcher attempts every populated channel concurrently and records
one outcome per channel; a failing channel never blocks the others.
"""

from herald.routing.destinations import resolve_chat_destination
from herald.routing.dispatcher import (
    ChannelDispatcher,
    ChannelSendError,
    DestinationNotConfiguredError,
    raise_for_failure,
)

__all__ = [
    "ChannelDispatcher",
    "ChannelSendError",
    "DestinationNotConfiguredError",
    "raise_for_failure",
    "resolve_chat_destination",
]
