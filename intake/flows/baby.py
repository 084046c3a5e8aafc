"""
Register Baby flow.

The parent's national ID is resolved to the backend guardian id before
anything about the baby is asked. An unknown guardian ends the flow; the
CHW registers the guardian first and comes back.
"""

from dataclasses import replace
from datetime import date
from enum import IntEnum
from typing import Any, Dict

from backend.types import BackendRequest, BackendResponse
from intake import messages
from intake.flows.base import Flow, Transition
from intake.state.types import BabyDraft, ConversationState, FlowName
from intake.validators import parse_date, parse_gender, parse_national_id

# Status fields owned by the backend once the schedule is generated
PENDING_IMMUNIZATION_STATUS = "pending schedule"
NO_VACCINE_YET = "none"


class BabyStep(IntEnum):
    GUARDIAN_NATIONAL_ID = 1
    FIRST_NAME = 2
    LAST_NAME = 3
    GENDER = 4
    DATE_OF_BIRTH = 5
    NATIONALITY = 6
    CONFIRM = 7


def _guardian_name(guardian: Dict[str, Any]) -> str:
    if guardian.get("name"):
        return str(guardian["name"])
    parts = [guardian.get("first_name"), guardian.get("last_name")]
    return " ".join(str(p) for p in parts if p) or "(no name on record)"


def summary(draft: BabyDraft) -> str:
    return (
        "Please confirm the baby details:\n"
        f"Guardian: {draft.guardian_name} (ID {draft.guardian_national_id})\n"
        f"Name: {draft.first_name} {draft.last_name}\n"
        f"Gender: {draft.gender}\n"
        f"Date of birth: {draft.date_of_birth[:10]}\n"
        f"Nationality: {draft.nationality}\n"
        "\n" + messages.CONFIRM_HINT
    )


class RegisterBabyFlow(Flow):
    name = FlowName.REGISTER_BABY
    first_prompt = messages.ASK_PARENT_NATIONAL_ID
    success_text = messages.BABY_REGISTERED

    def step(self, sender_id: str, state: ConversationState, text: str, lowered: str) -> Transition:
        step = BabyStep(state.step)
        draft: BabyDraft = state.data

        if step == BabyStep.GUARDIAN_NATIONAL_ID:
            national_id = parse_national_id(text)
            if national_id is None:
                return self.reprompt(state, messages.INVALID_NATIONAL_ID)
            return Transition(
                replace(state, data=replace(draft, guardian_national_id=national_id)),
                None,
                BackendRequest(operation="find_guardian", payload={"national_id": national_id}),
            )

        if step == BabyStep.FIRST_NAME:
            if not text:
                return self.reprompt(state, messages.EMPTY_TEXT)
            return self.advance(state, replace(draft, first_name=text), messages.ASK_BABY_LAST_NAME)

        if step == BabyStep.LAST_NAME:
            if not text:
                return self.reprompt(state, messages.EMPTY_TEXT)
            return self.advance(state, replace(draft, last_name=text), messages.ASK_BABY_GENDER)

        if step == BabyStep.GENDER:
            gender = parse_gender(lowered)
            if gender is None:
                return self.reprompt(state, messages.INVALID_GENDER)
            return self.advance(state, replace(draft, gender=gender), messages.ASK_BABY_DOB)

        if step == BabyStep.DATE_OF_BIRTH:
            born = parse_date(text)
            if born is None:
                return self.reprompt(state, messages.INVALID_DATE)
            if born > date.today():
                return self.reprompt(state, messages.DOB_IN_FUTURE)
            dob = f"{born.isoformat()}T00:00:00Z"
            return self.advance(state, replace(draft, date_of_birth=dob), messages.ASK_NATIONALITY)

        if step == BabyStep.NATIONALITY:
            if not text:
                return self.reprompt(state, messages.EMPTY_TEXT)
            draft = replace(draft, nationality=text)
            return self.advance(state, draft, summary(draft))

        return self.confirm(sender_id, state, lowered)

    def resume(
        self,
        state: ConversationState,
        request: BackendRequest,
        response: BackendResponse,
    ) -> Transition:
        if request.operation != "find_guardian":
            return super().resume(state, request, response)

        draft: BabyDraft = state.data
        if response.status == "not_found":
            return Transition.end(
                messages.GUARDIAN_NOT_FOUND.format(national_id=draft.guardian_national_id)
            )
        if not response.ok:
            return self.lookup_failed(response)

        guardian = response.data or {}
        if guardian.get("id") is None:
            return Transition.end(
                messages.GUARDIAN_NOT_FOUND.format(national_id=draft.guardian_national_id)
            )

        name = _guardian_name(guardian)
        draft = replace(draft, guardian_id=guardian["id"], guardian_name=name)
        prompt = f"{messages.GUARDIAN_FOUND.format(name=name)}\n\n{messages.ASK_BABY_FIRST_NAME}"
        return self.goto(state, BabyStep.FIRST_NAME, prompt, draft)

    def submission(self, sender_id: str, draft: BabyDraft) -> BackendRequest:
        return BackendRequest(
            operation="register_baby",
            payload={
                "guardian_id": draft.guardian_id,
                "first_name": draft.first_name,
                "last_name": draft.last_name,
                "gender": draft.gender,
                "date_of_birth": draft.date_of_birth,
                "nationality": draft.nationality,
                "immunization_status": PENDING_IMMUNIZATION_STATUS,
                "last_vaccine": NO_VACCINE_YET,
                "next_appointment": None,
            },
        )
