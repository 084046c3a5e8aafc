"""
Register Baby flow tests.
"""

import pytest

from backend import BackendRequest, BackendResponse, StubBackendAPI
from intake import FlowEngine, messages
from intake.flows import BabyStep, RegisterBabyFlow
from intake.state import BabyDraft, ConversationState, FlowName, InMemoryConversationStore

SENDER = "254711000111"


class TestGuardianLookup:

    def setup_method(self):
        self.flow = RegisterBabyFlow()
        self.start = ConversationState.start(FlowName.REGISTER_BABY)

    def test_valid_national_id_requests_lookup(self):
        result = self.flow.step(SENDER, self.start, "12345678", "12345678")

        assert result.request == BackendRequest(
            operation="find_guardian", payload={"national_id": "12345678"}
        )
        assert result.state.step == BabyStep.GUARDIAN_NATIONAL_ID
        assert result.state.data.guardian_national_id == "12345678"
        assert result.reply is None

    def test_malformed_national_id_reprompts_without_lookup(self):
        result = self.flow.step(SENDER, self.start, "abc", "abc")

        assert result.request is None
        assert result.state == self.start
        assert result.reply == messages.INVALID_NATIONAL_ID

    def test_lookup_not_found_terminates(self):
        state = ConversationState(
            flow=FlowName.REGISTER_BABY, step=1, data=BabyDraft(guardian_national_id="99999999")
        )
        result = self.flow.resume(
            state,
            BackendRequest(operation="find_guardian", payload={"national_id": "99999999"}),
            BackendResponse(status="not_found"),
        )

        assert result.terminates
        assert "99999999" in result.reply
        assert messages.ASK_BABY_FIRST_NAME not in result.reply

    def test_lookup_found_resolves_guardian_id(self):
        state = ConversationState(
            flow=FlowName.REGISTER_BABY, step=1, data=BabyDraft(guardian_national_id="12345678")
        )
        result = self.flow.resume(
            state,
            BackendRequest(operation="find_guardian", payload={"national_id": "12345678"}),
            BackendResponse(status="success", data={"id": 7, "first_name": "Cyrus", "last_name": "Ngugi"}),
        )

        assert result.state.step == BabyStep.FIRST_NAME
        assert result.state.data.guardian_id == 7
        assert "Cyrus Ngugi" in result.reply
        assert messages.ASK_BABY_FIRST_NAME in result.reply

    def test_lookup_failure_terminates_with_error(self):
        state = ConversationState(
            flow=FlowName.REGISTER_BABY, step=1, data=BabyDraft(guardian_national_id="12345678")
        )
        result = self.flow.resume(
            state,
            BackendRequest(operation="find_guardian", payload={"national_id": "12345678"}),
            BackendResponse(status="failed", status_code=503, error="Service Unavailable"),
        )

        assert result.terminates
        assert "Service Unavailable" in result.reply


class TestBabyDetails:

    def setup_method(self):
        self.flow = RegisterBabyFlow()

    def test_date_of_birth_gets_midnight_utc(self):
        state = ConversationState(
            flow=FlowName.REGISTER_BABY, step=int(BabyStep.DATE_OF_BIRTH),
            data=BabyDraft(guardian_id=101, first_name="Amani", last_name="Otieno", gender="M"),
        )
        result = self.flow.step(SENDER, state, "2024-01-15", "2024-01-15")

        assert result.state.data.date_of_birth == "2024-01-15T00:00:00Z"
        assert result.reply == messages.ASK_NATIONALITY

    @pytest.mark.parametrize("raw,reply", [
        ("15-01-2024", messages.INVALID_DATE),
        ("2024-02-31", messages.INVALID_DATE),
        ("2999-01-01", messages.DOB_IN_FUTURE),
    ])
    def test_bad_date_of_birth_reprompts(self, raw, reply):
        state = ConversationState(
            flow=FlowName.REGISTER_BABY, step=int(BabyStep.DATE_OF_BIRTH), data=BabyDraft(guardian_id=101)
        )
        result = self.flow.step(SENDER, state, raw, raw)

        assert result.state == state
        assert result.reply == reply


class TestBabyEndToEnd:

    @pytest.mark.asyncio
    async def test_unknown_guardian_ends_flow(self, chat, store, messenger, sender_id):
        """No guardian: state deleted, baby name never asked."""
        replies = await chat("2", "99999999")

        assert store.get(sender_id) is None
        assert len(replies) == 1
        assert "No guardian found" in replies[0]
        sent = [call.args[1] for call in messenger.send_text.await_args_list]
        assert not any(messages.ASK_BABY_FIRST_NAME in text for text in sent)

    @pytest.mark.asyncio
    async def test_full_registration(self, chat, store, backend, sender_id):
        replies = await chat(
            "2", "12345678", "Amani", "Otieno", "m", "2024-01-15", "Kenyan", "yes",
        )

        assert store.get(sender_id) is None
        assert messages.BABY_REGISTERED in replies[0]

        operation, payload = backend.calls[-1]
        assert operation == "register_baby"
        assert payload == {
            "guardian_id": 101,
            "first_name": "Amani",
            "last_name": "Otieno",
            "gender": "M",
            "date_of_birth": "2024-01-15T00:00:00Z",
            "nationality": "Kenyan",
            "immunization_status": "pending schedule",
            "last_vaccine": "none",
            "next_appointment": None,
        }

    @pytest.mark.asyncio
    async def test_lookup_outage_ends_flow(self, messenger, sender_id):
        store = InMemoryConversationStore()
        backend = StubBackendAPI(fail_operations={"find_guardian"})
        engine = FlowEngine(store, backend, messenger, authorized_senders=[sender_id])

        await engine.handle_message(sender_id, "2")
        replies = await engine.handle_message(sender_id, "12345678")

        assert store.get(sender_id) is None
        assert "Could not reach the server" in replies[0]
