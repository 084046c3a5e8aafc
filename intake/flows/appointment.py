"""Create Appointment flow."""

from dataclasses import replace
from enum import IntEnum

from backend.types import BackendRequest
from intake import messages
from intake.flows.base import Flow, Transition
from intake.state.types import AppointmentDraft, ConversationState, FlowName
from intake.validators import parse_date, parse_numeric_id


class AppointmentStep(IntEnum):
    BABY_ID = 1
    DATE = 2
    NOTES = 3
    CONFIRM = 4


def summary(draft: AppointmentDraft) -> str:
    return (
        "Please confirm the appointment:\n"
        f"Baby ID: {draft.baby_id}\n"
        f"Date: {draft.appointment_date}\n"
        f"Purpose: {draft.notes}\n"
        f"Created by: {draft.created_by}\n"
        "\n" + messages.CONFIRM_HINT
    )


class CreateAppointmentFlow(Flow):
    name = FlowName.CREATE_APPOINTMENT
    first_prompt = messages.ASK_APPOINTMENT_BABY_ID
    success_text = messages.APPOINTMENT_CREATED

    def step(self, sender_id: str, state: ConversationState, text: str, lowered: str) -> Transition:
        step = AppointmentStep(state.step)
        draft: AppointmentDraft = state.data

        if step == AppointmentStep.BABY_ID:
            baby_id = parse_numeric_id(text)
            if baby_id is None:
                return self.reprompt(state, messages.INVALID_NUMERIC_ID)
            return self.advance(state, replace(draft, baby_id=baby_id), messages.ASK_APPOINTMENT_DATE)

        if step == AppointmentStep.DATE:
            when = parse_date(text)
            if when is None:
                return self.reprompt(state, messages.INVALID_DATE)
            return self.advance(
                state, replace(draft, appointment_date=when.isoformat()), messages.ASK_APPOINTMENT_NOTES
            )

        if step == AppointmentStep.NOTES:
            if not text:
                return self.reprompt(state, messages.EMPTY_TEXT)
            draft = replace(draft, notes=text, created_by=sender_id)
            return self.advance(state, draft, summary(draft))

        return self.confirm(sender_id, state, lowered)

    def submission(self, sender_id: str, draft: AppointmentDraft) -> BackendRequest:
        return BackendRequest(
            operation="create_appointment",
            payload={
                "baby_id": draft.baby_id,
                "appointment_date": draft.appointment_date,
                "notes": draft.notes,
                "created_by": draft.created_by or sender_id,
            },
        )
