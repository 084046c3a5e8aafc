"""
Register Guardian flow tests.

Pure step tests drive RegisterGuardianFlow directly; the end-to-end tests
go through the engine with the stub backend.
"""

import pytest

from backend import StubBackendAPI
from intake import FlowEngine, messages
from intake.flows import GuardianStep, RegisterGuardianFlow
from intake.state import ConversationState, FlowName, GuardianDraft, InMemoryConversationStore

SENDER = "254711000111"


def at_step(step, **fields):
    return ConversationState(
        flow=FlowName.REGISTER_GUARDIAN, step=int(step), data=GuardianDraft(**fields)
    )


class TestGuardianSteps:
    """Transitions in isolation: (state, input) -> (state, reply, request)."""

    def setup_method(self):
        self.flow = RegisterGuardianFlow()

    def test_name_advances(self):
        result = self.flow.step(SENDER, at_step(GuardianStep.NAME), "Jane Wanjiru", "jane wanjiru")

        assert result.state.step == GuardianStep.NATIONAL_ID
        assert result.state.data.name == "Jane Wanjiru"
        assert result.reply == messages.ASK_GUARDIAN_NATIONAL_ID
        assert result.request is None

    def test_short_national_id_reprompts(self):
        state = at_step(GuardianStep.NATIONAL_ID, name="Jane")
        result = self.flow.step(SENDER, state, "1234", "1234")

        assert result.state == state
        assert result.reply == messages.INVALID_NATIONAL_ID

    def test_gender_enumeration(self):
        state = at_step(GuardianStep.GENDER, name="Jane", national_id="12345678")

        assert self.flow.step(SENDER, state, "F", "f").state.data.gender == "F"
        assert self.flow.step(SENDER, state, "x", "x").state == state

    @pytest.mark.parametrize("raw", ["0712345678", "+254712345678", "254712345678"])
    def test_whatsapp_number_normalized(self, raw):
        state = at_step(GuardianStep.WHATSAPP_NUMBER, name="Jane", national_id="12345678", gender="F")
        result = self.flow.step(SENDER, state, raw, raw.lower())

        assert result.state.step == GuardianStep.NEAREST_CLINIC
        assert result.state.data.whatsapp_number == "254712345678"

    @pytest.mark.parametrize("raw", ["2024-01-01", "0812345678", "12345", "call me"])
    def test_invalid_whatsapp_number_keeps_step_and_data(self, raw):
        state = at_step(GuardianStep.WHATSAPP_NUMBER, name="Jane", national_id="12345678", gender="F")
        result = self.flow.step(SENDER, state, raw, raw.lower())

        assert result.state is state
        assert result.state.step == GuardianStep.WHATSAPP_NUMBER
        assert result.reply == messages.INVALID_WHATSAPP

    def test_residence_shows_summary(self):
        state = at_step(
            GuardianStep.RESIDENCE, name="Jane", national_id="12345678", gender="F",
            whatsapp_number="254712345678", nearest_clinic="Kibera HC",
        )
        result = self.flow.step(SENDER, state, "Olympic Estate", "olympic estate")

        assert result.state.step == GuardianStep.CONFIRM
        assert "Jane" in result.reply
        assert "254712345678" in result.reply
        assert messages.CONFIRM_HINT in result.reply

    def test_confirm_yes_requests_registration(self):
        state = at_step(
            GuardianStep.CONFIRM, name="Jane", national_id="12345678", gender="F",
            whatsapp_number="254712345678", nearest_clinic="Kibera HC",
            residence_location="Olympic Estate",
        )
        result = self.flow.step(SENDER, state, "Y", "y")

        assert result.request.operation == "register_guardian"
        assert result.request.payload == {
            "name": "Jane",
            "national_id": "12345678",
            "gender": "F",
            "whatsapp_number": "254712345678",
            "nearest_clinic": "Kibera HC",
            "residence_location": "Olympic Estate",
        }

    def test_confirm_other_input_reprompts(self):
        state = at_step(GuardianStep.CONFIRM, name="Jane")
        result = self.flow.step(SENDER, state, "maybe", "maybe")

        assert result.state == state
        assert result.reply == messages.CONFIRM_REPROMPT
        assert result.request is None


class TestGuardianEndToEnd:
    """Full conversations through the engine."""

    @pytest.mark.asyncio
    async def test_first_two_messages(self, chat, store, sender_id):
        """'1' opens the flow at step 1; the name moves it to step 2."""
        replies = await chat("1")

        assert store.get(sender_id) == ConversationState(
            flow=FlowName.REGISTER_GUARDIAN, step=1, data=GuardianDraft()
        )
        assert replies == [messages.ASK_GUARDIAN_NAME]

        await chat("Jane Wanjiru")
        state = store.get(sender_id)
        assert state.data.name == "Jane Wanjiru"
        assert state.step == 2

    @pytest.mark.asyncio
    async def test_full_flow_submits_once(self, chat, store, backend, sender_id):
        replies = await chat(
            "1", "Jane Wanjiru", "12345678", "F", "254712345678",
            "Kibera Health Centre", "Olympic Estate", "Y",
        )

        registrations = [c for c in backend.calls if c[0] == "register_guardian"]
        assert len(registrations) == 1
        assert registrations[0][1]["whatsapp_number"] == "254712345678"
        assert store.get(sender_id) is None
        assert messages.GUARDIAN_REGISTERED in replies[0]
        assert replies[0].endswith(messages.MENU_TEXT)

    @pytest.mark.asyncio
    async def test_confirm_no_restarts(self, chat, store, backend, sender_id):
        replies = await chat(
            "1", "Jane Wanjiru", "12345678", "F", "0712345678",
            "Kibera Health Centre", "Olympic Estate", "n",
        )

        assert store.get(sender_id) == ConversationState.start(FlowName.REGISTER_GUARDIAN)
        assert messages.ASK_GUARDIAN_NAME in replies[0]
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_backend_failure_clears_state(self, messenger, sender_id):
        store = InMemoryConversationStore()
        backend = StubBackendAPI(fail_operations={"register_guardian"})
        engine = FlowEngine(store, backend, messenger, authorized_senders=[sender_id])

        for text in ("1", "Jane", "12345678", "F", "0712345678", "Clinic", "Estate"):
            await engine.handle_message(sender_id, text)
        replies = await engine.handle_message(sender_id, "y")

        assert store.get(sender_id) is None
        assert "rejected" in replies[0]
        assert "Internal Server Error" in replies[0]
