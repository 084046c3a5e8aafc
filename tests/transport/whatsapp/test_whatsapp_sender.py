"""
WhatsApp Sender Tests

Outbound Cloud API calls against httpx.MockTransport.
"""

import json

import httpx
import pytest

from intake import FlowEngine, messages
from transport.whatsapp.sender import WhatsAppSender, WhatsAppSenderError, send_text_message

CLOUD_API_OK = {
    "messaging_product": "whatsapp",
    "contacts": [{"input": "254712345678", "wa_id": "254712345678"}],
    "messages": [{"id": "wamid.out.1"}],
}


def transport_returning(status_code, body=None, seen=None):
    def handler(request):
        if seen is not None:
            seen.append(request)
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    return httpx.MockTransport(handler)


class TestSendTextMessage:

    @pytest.mark.asyncio
    async def test_posts_text_payload(self):
        seen = []
        result = await send_text_message(
            "254712345678",
            "Reminder: BCG tomorrow",
            access_token="token",
            phone_number_id="PHONE_ID",
            transport=transport_returning(200, CLOUD_API_OK, seen),
        )

        request = seen[0]
        assert str(request.url) == "https://graph.facebook.com/v20.0/PHONE_ID/messages"
        assert request.headers["Authorization"] == "Bearer token"
        assert json.loads(request.content) == {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": "254712345678",
            "type": "text",
            "text": {"body": "Reminder: BCG tomorrow"},
        }
        assert result.messages[0]["id"] == "wamid.out.1"

    @pytest.mark.asyncio
    async def test_api_version_in_path(self):
        seen = []
        await send_text_message(
            "254712345678", "hi", "token", "PHONE_ID", api_version="v21.0",
            transport=transport_returning(200, CLOUD_API_OK, seen),
        )
        assert seen[0].url.path == "/v21.0/PHONE_ID/messages"

    @pytest.mark.asyncio
    async def test_api_error_raises(self):
        with pytest.raises(WhatsAppSenderError):
            await send_text_message(
                "254712345678", "hi", "token", "PHONE_ID",
                transport=transport_returning(401, {"error": {"message": "Invalid OAuth access token"}}),
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        httpx.Response(200, text="OK"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"messages": "wamid.out.1"}),
    ])
    async def test_unreadable_success_body_raises(self, response):
        with pytest.raises(WhatsAppSenderError):
            await send_text_message(
                "254712345678", "hi", "token", "PHONE_ID",
                transport=httpx.MockTransport(lambda request: response),
            )

    @pytest.mark.asyncio
    async def test_missing_credentials_raise(self):
        with pytest.raises(WhatsAppSenderError):
            await send_text_message("254712345678", "hi", "", "PHONE_ID")
        with pytest.raises(WhatsAppSenderError):
            await send_text_message("254712345678", "hi", "token", "")


class TestWhatsAppSender:

    @pytest.mark.asyncio
    async def test_success(self):
        sender = WhatsAppSender("token", "PHONE_ID", transport=transport_returning(200, CLOUD_API_OK))
        assert await sender.send_text("254712345678", "hi") is True

    @pytest.mark.asyncio
    async def test_plain_text_ok_reported_not_raised(self):
        sender = WhatsAppSender(
            "token", "PHONE_ID",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="OK")),
        )
        assert await sender.send_text("254712345678", "hi") is False

    @pytest.mark.asyncio
    async def test_engine_keeps_going_after_unreadable_reply(self, store, backend, sender_id):
        """Every reply of a message is still attempted and the state is committed."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text="OK")

        sender = WhatsAppSender("token", "PHONE_ID", transport=httpx.MockTransport(handler))
        engine = FlowEngine(store, backend, sender, authorized_senders=[sender_id])

        replies = await engine.handle_message(sender_id, "1")

        assert replies == [messages.ASK_GUARDIAN_NAME]
        assert len(seen) == 1
        assert store.get(sender_id).step == 1

    @pytest.mark.asyncio
    async def test_failure_reported_not_raised(self):
        def refuse(request):
            raise httpx.ConnectError("unreachable", request=request)

        sender = WhatsAppSender("token", "PHONE_ID", transport=httpx.MockTransport(refuse))
        assert await sender.send_text("254712345678", "hi") is False
