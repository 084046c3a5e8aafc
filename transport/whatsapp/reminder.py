"""
Reminder Relay

POST /send-reminder lets the backend push a reminder text (for example an
upcoming vaccination) to a guardian's WhatsApp number. Uses the reminder
credentials when configured, otherwise the bot's own.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from config import Config

from .schemas import ReminderRequest
from .sender import WhatsAppSenderError, send_text_message

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Reminders"])


@router.post("/send-reminder")
async def send_reminder(reminder: ReminderRequest):
    """
    Deliver one reminder.

    Returns:
        200 {"status": "Reminder sent", "response": <Cloud API answer>}
        400 when "to" or "message" is missing
        500 when WhatsApp refuses or is unreachable
    """
    if not reminder.to or not reminder.message:
        return JSONResponse(status_code=400, content={"error": "Missing to/message"})

    try:
        result = await send_text_message(
            reminder.to,
            reminder.message,
            access_token=Config.REMINDER_WHATSAPP_TOKEN or Config.WHATSAPP_ACCESS_TOKEN,
            phone_number_id=Config.REMINDER_PHONE_NUMBER_ID or Config.WHATSAPP_PHONE_NUMBER_ID,
            api_version=Config.WHATSAPP_API_VERSION,
        )
    except WhatsAppSenderError as e:
        logger.error(f"Failed to send reminder to {reminder.to}: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to send reminder"})

    logger.info(f"Reminder sent to {reminder.to}")
    return {"status": "Reminder sent", "response": result.model_dump()}
