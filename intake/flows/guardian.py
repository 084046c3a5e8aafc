"""Register Guardian flow."""

from dataclasses import replace
from enum import IntEnum

from backend.types import BackendRequest
from intake import messages
from intake.flows.base import Flow, Transition
from intake.state.types import ConversationState, FlowName, GuardianDraft
from intake.validators import normalize_kenyan_mobile, parse_gender, parse_national_id


class GuardianStep(IntEnum):
    NAME = 1
    NATIONAL_ID = 2
    GENDER = 3
    WHATSAPP_NUMBER = 4
    NEAREST_CLINIC = 5
    RESIDENCE = 6
    CONFIRM = 7


def summary(draft: GuardianDraft) -> str:
    return (
        "Please confirm the guardian details:\n"
        f"Name: {draft.name}\n"
        f"National ID: {draft.national_id}\n"
        f"Gender: {draft.gender}\n"
        f"WhatsApp: {draft.whatsapp_number}\n"
        f"Nearest clinic: {draft.nearest_clinic}\n"
        f"Residence: {draft.residence_location}\n"
        "\n" + messages.CONFIRM_HINT
    )


class RegisterGuardianFlow(Flow):
    name = FlowName.REGISTER_GUARDIAN
    first_prompt = messages.ASK_GUARDIAN_NAME
    success_text = messages.GUARDIAN_REGISTERED

    def step(self, sender_id: str, state: ConversationState, text: str, lowered: str) -> Transition:
        step = GuardianStep(state.step)
        draft: GuardianDraft = state.data

        if step == GuardianStep.NAME:
            if not text:
                return self.reprompt(state, messages.EMPTY_TEXT)
            return self.advance(state, replace(draft, name=text), messages.ASK_GUARDIAN_NATIONAL_ID)

        if step == GuardianStep.NATIONAL_ID:
            national_id = parse_national_id(text)
            if national_id is None:
                return self.reprompt(state, messages.INVALID_NATIONAL_ID)
            return self.advance(state, replace(draft, national_id=national_id), messages.ASK_GUARDIAN_GENDER)

        if step == GuardianStep.GENDER:
            gender = parse_gender(lowered)
            if gender is None:
                return self.reprompt(state, messages.INVALID_GENDER)
            return self.advance(state, replace(draft, gender=gender), messages.ASK_GUARDIAN_WHATSAPP)

        if step == GuardianStep.WHATSAPP_NUMBER:
            number = normalize_kenyan_mobile(text)
            if number is None:
                return self.reprompt(state, messages.INVALID_WHATSAPP)
            return self.advance(state, replace(draft, whatsapp_number=number), messages.ASK_NEAREST_CLINIC)

        if step == GuardianStep.NEAREST_CLINIC:
            if not text:
                return self.reprompt(state, messages.EMPTY_TEXT)
            return self.advance(state, replace(draft, nearest_clinic=text), messages.ASK_RESIDENCE)

        if step == GuardianStep.RESIDENCE:
            if not text:
                return self.reprompt(state, messages.EMPTY_TEXT)
            draft = replace(draft, residence_location=text)
            return self.advance(state, draft, summary(draft))

        return self.confirm(sender_id, state, lowered)

    def submission(self, sender_id: str, draft: GuardianDraft) -> BackendRequest:
        return BackendRequest(
            operation="register_guardian",
            payload={
                "name": draft.name,
                "national_id": draft.national_id,
                "gender": draft.gender,
                "whatsapp_number": draft.whatsapp_number,
                "nearest_clinic": draft.nearest_clinic,
                "residence_location": draft.residence_location,
            },
        )
