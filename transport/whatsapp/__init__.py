"""WhatsApp Transport Layer - Module Exports"""

from .normalize import (
    NormalizationError,
    normalize_messages,
)
from .reminder import router as reminder_router
from .schemas import (
    NormalizedMessage,
    ReminderRequest,
    WhatsAppMessageResponse,
    WhatsAppWebhookPayload,
)
from .security import compute_signature, verify_signature, verify_webhook_challenge
from .sender import WhatsAppSender, WhatsAppSenderError, send_text_message
from .webhook import router

__all__ = [
    # Schemas
    "NormalizedMessage",
    "WhatsAppWebhookPayload",
    "WhatsAppMessageResponse",
    "ReminderRequest",
    # Normalization
    "normalize_messages",
    "NormalizationError",
    # Security
    "compute_signature",
    "verify_signature",
    "verify_webhook_challenge",
    # Sender
    "send_text_message",
    "WhatsAppSender",
    "WhatsAppSenderError",
    # Routers
    "router",
    "reminder_router",
]
