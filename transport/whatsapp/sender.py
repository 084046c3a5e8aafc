"""
WhatsApp Message Sender

Sends text replies through the WhatsApp Cloud API.
No formatting intelligence. No retries.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from .schemas import WhatsAppMessageResponse

logger = logging.getLogger(__name__)

GRAPH_API_BASE = "https://graph.facebook.com"


class WhatsAppSenderError(Exception):
    """Failed to send a message to WhatsApp."""
    pass


async def send_text_message(
    to: str,
    body: str,
    access_token: str,
    phone_number_id: str,
    api_version: str = "v20.0",
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> WhatsAppMessageResponse:
    """
    Send a text message via WhatsApp Cloud API.

    Args:
        to: Recipient phone number, digits only (e.g. "254712345678")
        body: Message text
        access_token: Cloud API bearer token
        phone_number_id: Business phone number id sending the message
        api_version: Graph API version
        transport: Optional httpx transport (tests)

    Returns:
        WhatsAppMessageResponse from Meta API

    Raises:
        WhatsAppSenderError: If send fails
    """
    if not access_token:
        raise WhatsAppSenderError("WhatsApp access token not configured")
    if not phone_number_id:
        raise WhatsAppSenderError("WhatsApp phone number id not configured")

    endpoint = f"{GRAPH_API_BASE}/{api_version}/{phone_number_id}/messages"

    payload = {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": to,
        "type": "text",
        "text": {
            "body": body
        }
    }

    headers = {
        "Authorization": f"Bearer {access_token}",
        "Content-Type": "application/json"
    }

    # Send (no retries)
    try:
        async with httpx.AsyncClient(transport=transport) as client:
            response = await client.post(
                endpoint,
                json=payload,
                headers=headers,
                timeout=30.0
            )
    except httpx.RequestError as e:
        raise WhatsAppSenderError(f"HTTP request failed: {e}")

    if response.status_code != 200:
        error_text = response.text
        logger.error(
            f"WhatsApp API error: {response.status_code} - {error_text}",
            extra={
                "status_code": response.status_code,
                "error_body": error_text,
            }
        )
        raise WhatsAppSenderError(
            f"WhatsApp API returned {response.status_code}"
        )

    try:
        result = WhatsAppMessageResponse.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        logger.error(
            f"Unreadable WhatsApp API response: {e}",
            extra={"recipient": to, "error_body": response.text},
        )
        raise WhatsAppSenderError(f"Unreadable WhatsApp API response: {e}") from e

    logger.info(
        f"Reply sent to {to}",
        extra={
            "recipient": to,
            "response_id": (result.messages or [{}])[0].get("id"),
        }
    )
    return result


class WhatsAppSender:
    """
    Outbound channel used by the flow engine.

    Failures are logged and reported as False; delivery problems never
    reach conversation state.
    """

    def __init__(
        self,
        access_token: str,
        phone_number_id: str,
        api_version: str = "v20.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.access_token = access_token
        self.phone_number_id = phone_number_id
        self.api_version = api_version
        self._transport = transport

    async def send_text(self, to: str, body: str) -> bool:
        try:
            await send_text_message(
                to,
                body,
                access_token=self.access_token,
                phone_number_id=self.phone_number_id,
                api_version=self.api_version,
                transport=self._transport,
            )
            return True
        except WhatsAppSenderError as e:
            logger.error(f"Failed to send message to {to}: {e}", extra={"recipient": to})
            return False
