"""Queue channel backed by SQS."""

from __future__ import annotations

from typing import Any

from herald.bridge.aws import run_blocking


class SqsQueueChannel:
    def __init__(self, client: Any) -> None:
        self._client = client

    async def send(self, queue_url: str, body: str) -> str:
        response = await run_blocking(
            self._client.send_message, QueueUrl=queue_url, MessageBody=body
        )
        return response["MessageId"]
