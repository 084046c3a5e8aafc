"""
WhatsApp Transport Layer - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Only defines the contract between WhatsApp and the flow engine.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ============================================================================
# NORMALIZED MESSAGE (THE CONTRACT)
# ============================================================================

class NormalizedMessage(BaseModel):
    """
    Canonical inbound text message that the flow engine consumes.
    """

    text: str = Field(..., description="Message body, whitespace trimmed")
    sender_id: str = Field(..., description="Sender phone number, digits only")
    message_id: str = Field(..., description="Unique WhatsApp message ID")
    timestamp: datetime = Field(..., description="Message timestamp")

    class Config:
        """Pydantic config."""
        frozen = True  # Immutable - transport shouldn't mutate


# ============================================================================
# WHATSAPP WEBHOOK PAYLOAD SCHEMAS (INPUT)
# ============================================================================

class WhatsAppWebhookPayload(BaseModel):
    """
    Full WhatsApp webhook payload.

    ref: https://developers.facebook.com/docs/whatsapp/cloud-api/webhooks/payload-example
    """

    object: str = Field(..., description="Always 'whatsapp_business_account'")
    entry: list[dict] = Field(..., description="Webhook entries")

    class Config:
        extra = "allow"  # WhatsApp may add fields


# ============================================================================
# WHATSAPP API RESPONSE (OUTPUT)
# ============================================================================

class WhatsAppMessageResponse(BaseModel):
    """Response from WhatsApp Cloud API when sending a message."""

    messaging_product: str = Field(default="whatsapp")
    contacts: list[dict[str, str]] = Field(default_factory=list)
    messages: list[dict[str, str]] = Field(default_factory=list)


# ============================================================================
# REMINDER RELAY (INPUT)
# ============================================================================

class ReminderRequest(BaseModel):
    """Reminder the backend asks us to deliver to a guardian."""

    to: Optional[str] = None
    message: Optional[str] = None
