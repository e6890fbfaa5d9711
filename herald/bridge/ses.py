"""Email channel backed by SES."""

from __future__ import annotations

from typing import Any

from herald.bridge.aws import run_blocking


class SesEmailChannel:
    def __init__(self, client: Any) -> None:
        self._client = client

    async def send(self, sender: str, to: str, subject: str, html_body: str) -> str:
        response = await run_blocking(
            self._client.send_email,
            Source=sender,
            Destination={"ToAddresses": [to]},
            Message={
                "Subject": {"Data": subject, "Charset": "UTF-8"},
                "Body": {"Html": {"Data": html_body, "Charset": "UTF-8"}},
            },
        )
        return response["MessageId"]
