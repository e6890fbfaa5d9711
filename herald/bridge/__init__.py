"""Bridge layer between Herald and the external services it talks to.

Modules
-------
aws
    Builds boto3 clients from :class:`~herald.config.HeraldConfig`, honouring
    the per-service endpoint overrides and bounding each call by the channel
    timeout.
slack
    Posts chat payloads to incoming webhooks with ``httpx.AsyncClient``.
ses / sqs / sns
    Email, queue and topic channels.  boto3 is blocking, so each call runs on
    the shared worker pool via ``run_blocking``.
ecr
    Pages through the registry's scan findings for an image digest.
kms
    Decrypts the secret configuration fields at startup.
"""

from herald.bridge.aws import create_aws_client
from herald.bridge.ecr import EcrFindingsLookup
from herald.bridge.kms import decrypt_config
from herald.bridge.ses import SesEmailChannel
from herald.bridge.slack import SlackWebhookClient
from herald.bridge.sns import SnsTopicChannel
from herald.bridge.sqs import SqsQueueChannel

__all__ = [
    "EcrFindingsLookup",
    "SesEmailChannel",
    "SlackWebhookClient",
    "SnsTopicChannel",
    "SqsQueueChannel",
    "create_aws_client",
    "decrypt_config",
]
