"""
WhatsApp Webhook Receiver

FastAPI router for the WhatsApp Cloud API webhook:
- GET  /whatsapp/webhook: subscription handshake
- POST /whatsapp/webhook: message delivery

Meta expects a 200 quickly, so deliveries are acknowledged first and the
messages are handed to the flow engine as background tasks.
"""

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse

from config import Config

from .normalize import NormalizationError, normalize_messages
from .security import verify_signature, verify_webhook_challenge

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/whatsapp", tags=["WhatsApp Transport"])


def get_flow_engine():
    """Dependency returning the process-wide flow engine."""
    from infra.bootstrap import get_engine

    return get_engine()


# ============================================================================
# WEBHOOK CHALLENGE (Setup only)
# ============================================================================

@router.get("/webhook", response_class=PlainTextResponse)
async def whatsapp_webhook_challenge(
    hub_mode: str | None = Query(None, alias="hub.mode"),
    hub_challenge: str | None = Query(None, alias="hub.challenge"),
    hub_verify_token: str | None = Query(None, alias="hub.verify_token"),
) -> str:
    """
    Verify webhook subscription challenge from Meta.

    Returns:
        The challenge string (plain text), or 403
    """
    try:
        challenge = verify_webhook_challenge(
            hub_mode, hub_challenge, hub_verify_token, Config.WHATSAPP_VERIFY_TOKEN
        )
    except HTTPException:
        logger.warning("Webhook verification failed")
        raise

    logger.info("Webhook verified")
    return challenge


# ============================================================================
# WEBHOOK RECEIVER (Message processing)
# ============================================================================

@router.post("/webhook")
async def whatsapp_webhook_receiver(
    request: Request,
    background_tasks: BackgroundTasks,
    engine=Depends(get_flow_engine),
) -> dict[str, str]:
    """
    Receive WhatsApp messages via webhook.

    Flow:
    1. Read raw payload
    2. Verify signature when WHATSAPP_APP_SECRET is configured (401/403)
    3. Normalize text messages; other types are logged and ignored
    4. Schedule each message for the flow engine
    5. Return 200 (processing continues after the response)
    """
    body = await request.body()

    await verify_signature(request, body, Config.WHATSAPP_APP_SECRET)

    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        logger.error("Invalid JSON payload on WhatsApp webhook")
        return {"status": "ok"}

    try:
        messages = normalize_messages(payload)
    except NormalizationError as e:
        logger.warning(f"Normalization failed: {e}")
        return {"status": "ok"}

    for message in messages:
        logger.info(
            f"New message from {message.sender_id}",
            extra={
                "sender_id": message.sender_id,
                "message_id": message.message_id,
            }
        )
        background_tasks.add_task(engine.handle_message, message.sender_id, message.text)

    # Always return 200 to acknowledge the webhook
    # (Per WhatsApp requirements)
    return {"status": "ok"}
