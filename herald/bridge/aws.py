"""boto3 client factory and the worker pool its blocking calls run on."""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

import boto3
from botocore.config import Config

from herald.config import HeraldConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Owned here rather than by the event loop, so ``asyncio.run`` does not wait
# for a call that already timed out.
_EXECUTOR = ThreadPoolExecutor(max_workers=8, thread_name_prefix="herald-aws")


def client_config(config: HeraldConfig) -> Config:
    """botocore settings bounding every call by ``channel_timeout_seconds``."""
    timeout = config.channel_timeout_seconds
    return Config(
        connect_timeout=timeout,
        read_timeout=timeout,
        retries={"max_attempts": 1, "mode": "standard"},
    )


def create_aws_client(service: str, config: HeraldConfig) -> Any:
    """Return a boto3 client for *service* in the configured region.

    ``<service>_endpoint`` on the config, when set, overrides the endpoint
    URL (used for local stacks and tests).
    """
    endpoint = getattr(config, f"{service}_endpoint", None)
    kwargs: dict[str, Any] = {
        "region_name": config.aws_region,
        "config": client_config(config),
    }
    if endpoint:
        kwargs["endpoint_url"] = endpoint
        logger.debug("Using endpoint override %s for %s", endpoint, service)
    return boto3.client(service, **kwargs)


async def run_blocking(func: Callable[..., T], /, *args: Any, **kwargs: Any) -> T:
    """Run a blocking boto3 call on the shared worker pool."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(_EXECUTOR, functools.partial(func, *args, **kwargs))
