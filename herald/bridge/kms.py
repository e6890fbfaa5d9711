"""Decryption of encrypted configuration values with KMS."""

from __future__ import annotations

import base64
import logging
from typing import Any

from herald.config import SECRET_FIELDS, SECRET_TOPIC_KEYS, HeraldConfig

logger = logging.getLogger(__name__)


def decrypt_value(kms_client: Any, ciphertext: str, function_name: str) -> str:
    """Decrypt one base64-encoded ciphertext bound to *function_name*."""
    response = kms_client.decrypt(
        CiphertextBlob=base64.b64decode(ciphertext),
        EncryptionContext={"LambdaFunctionName": function_name},
    )
    return response["Plaintext"].decode("utf-8")


def decrypt_config(config: HeraldConfig, kms_client: Any) -> HeraldConfig:
    """Return a copy of *config* with every non-empty secret decrypted.

    Covers the fields in ``SECRET_FIELDS`` and the ``topic_arns`` entries in
    ``SECRET_TOPIC_KEYS``.  A no-op when ``config.decrypt_secrets`` is off.
    """
    if not config.decrypt_secrets:
        return config

    updates: dict[str, Any] = {}
    for field in SECRET_FIELDS:
        value = getattr(config, field)
        if value:
            updates[field] = decrypt_value(kms_client, value, config.function_name)
    decrypted = len(updates)

    topic_arns = dict(config.topic_arns)
    for key in SECRET_TOPIC_KEYS:
        if topic_arns.get(key):
            topic_arns[key] = decrypt_value(kms_client, topic_arns[key], config.function_name)
            decrypted += 1
    if topic_arns != config.topic_arns:
        updates["topic_arns"] = topic_arns

    logger.info("Decrypted %d configuration secrets", decrypted)
    return config.model_copy(update=updates)
