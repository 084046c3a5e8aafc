"""
WhatsApp Input Normalization

PURE CONVERSION - NO LOGIC

Converts a WhatsApp webhook payload into NormalizedMessage objects.
- TEXT: Extract body, trim, no enrichment
- Anything else (audio, image, reactions, ...): logged and skipped
- Status-only deliveries (sent/delivered/read) carry no messages
"""

import logging
from datetime import datetime
from typing import Any, List

from .schemas import NormalizedMessage, WhatsAppWebhookPayload

logger = logging.getLogger(__name__)

WHATSAPP_OBJECT = "whatsapp_business_account"


class NormalizationError(Exception):
    """Input normalization failed."""
    pass


def normalize_messages(
    payload: dict | WhatsAppWebhookPayload,
) -> List[NormalizedMessage]:
    """
    Collect every text message in a webhook delivery.

    Walks entry[].changes[].value.messages[]; a single delivery can batch
    several messages.

    Args:
        payload: Raw WhatsApp webhook payload

    Returns:
        Text messages in delivery order (possibly empty)

    Raises:
        NormalizationError: Payload is not a WhatsApp Business delivery
    """

    # Ensure payload is dict
    if isinstance(payload, WhatsAppWebhookPayload):
        payload = payload.model_dump()

    if not isinstance(payload, dict):
        raise NormalizationError("Payload is not a JSON object")

    if payload.get("object") not in (None, WHATSAPP_OBJECT):
        raise NormalizationError(f"Unexpected webhook object: {payload.get('object')}")

    try:
        entries = payload["entry"]
    except KeyError as e:
        raise NormalizationError(f"Invalid payload structure: {e}")

    normalized: List[NormalizedMessage] = []
    for entry in _objects(entries):
        for change in _objects(entry.get("changes")):
            value = change.get("value")
            if not isinstance(value, dict):
                continue
            for message in _objects(value.get("messages")):
                result = _normalize_one(message)
                if result is not None:
                    normalized.append(result)
    return normalized


def _objects(items: Any) -> List[dict]:
    """JSON objects of a list; anything else in the payload is skipped."""
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def _normalize_one(message: dict) -> NormalizedMessage | None:
    message_type = message.get("type")
    if message_type != "text":
        logger.info(
            f"Ignoring non-text message of type {message_type}",
            extra={"sender_id": message.get("from"), "message_type": message_type},
        )
        return None

    try:
        return _normalize_text_message(message)
    except NormalizationError as e:
        logger.warning(f"Skipping malformed text message: {e}")
        return None


def _normalize_text_message(message: dict) -> NormalizedMessage:
    """
    Normalize text message.

    Rules:
    - Extract message body
    - Trim whitespace
    - No enrichment or corrections
    """

    try:
        sender_id = message["from"]
        message_id = message["id"]
        text_body = message["text"]["body"]
    except (KeyError, TypeError) as e:
        raise NormalizationError(f"Text message missing field: {e}")

    for name, field in (("from", sender_id), ("id", message_id), ("text.body", text_body)):
        if not isinstance(field, str):
            raise NormalizationError(f"Text message field {name} is not a string")

    try:
        timestamp = datetime.fromtimestamp(int(message.get("timestamp", 0)))
    except (TypeError, ValueError, OverflowError, OSError):
        timestamp = datetime.now()

    return NormalizedMessage(
        text=text_body.strip(),
        sender_id=sender_id,
        message_id=message_id,
        timestamp=timestamp,
    )
