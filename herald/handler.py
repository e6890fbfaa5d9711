"""Host entry point: one call per inbound event."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any

from herald.config import config
from herald.core.processor import NotificationProcessor

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_processor() -> NotificationProcessor:
    """Build the processor once per process from the module config."""
    logging.getLogger("herald").setLevel(config.log_level)
    return NotificationProcessor.from_config(config)


def lambda_handler(event: dict[str, Any], context: Any = None) -> str:
    """Process *event* and return the dispatch summary.

    Failures propagate so the host can apply its redelivery policy.
    """
    raw = json.dumps(event).encode("utf-8")
    result = get_processor().process(raw)
    return result.summary()
