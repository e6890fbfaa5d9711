"""Topic channel backed by SNS."""

from __future__ import annotations

from typing import Any

from herald.bridge.aws import run_blocking


class SnsTopicChannel:
    def __init__(self, client: Any) -> None:
        self._client = client

    async def publish(self, topic_arn: str, body: str) -> str:
        response = await run_blocking(
            self._client.publish, TopicArn=topic_arn, Message=body
        )
        return response["MessageId"]
