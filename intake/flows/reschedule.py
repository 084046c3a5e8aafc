"""
Modify/Cancel Appointment flow.

    BABY_ID --list--> SELECT --> ACTION --1--> RESCHEDULE --update--> end
                                        +--2--> CONFIRM_CANCEL --yes--delete--> end
                                                     +--other--> ACTION
"""

from dataclasses import replace
from enum import IntEnum
from typing import Any, Dict, List, Tuple

from backend.types import BackendRequest, BackendResponse
from intake import messages
from intake.flows.base import Flow, Transition
from intake.state.types import (
    AppointmentChangeDraft,
    AppointmentSummary,
    ConversationState,
    FlowName,
)
from intake.validators import parse_date, parse_numeric_id


class ChangeStep(IntEnum):
    BABY_ID = 1
    SELECT = 2
    ACTION = 3
    RESCHEDULE = 4
    CONFIRM_CANCEL = 5


RESCHEDULE_OPTIONS = {"1", "reschedule", "modify"}
CANCEL_OPTIONS = {"2", "cancel appointment", "delete"}


def _summaries(records: List[Dict[str, Any]]) -> Tuple[AppointmentSummary, ...]:
    return tuple(
        AppointmentSummary(
            id=record["id"],
            appointment_date=str(record.get("appointment_date") or record.get("date") or "?"),
            notes=str(record.get("notes") or record.get("purpose") or ""),
        )
        for record in records
        if record.get("id") is not None
    )


def listing_prompt(draft: AppointmentChangeDraft) -> str:
    lines = []
    for position, appointment in enumerate(draft.appointments, start=1):
        line = f"{position}. {appointment.appointment_date}"
        if appointment.notes:
            line += f" - {appointment.notes}"
        lines.append(line)
    return messages.SELECT_APPOINTMENT.format(baby_id=draft.baby_id, listing="\n".join(lines))


def parse_reschedule(text: str) -> Tuple[str, str]:
    """Split "date, note" on the first comma. The note is optional."""
    date_part, _, note = text.partition(",")
    return date_part.strip(), note.strip() or messages.DEFAULT_RESCHEDULE_NOTE


class ModifyAppointmentFlow(Flow):
    name = FlowName.MODIFY_APPOINTMENT
    first_prompt = messages.ASK_CHANGE_BABY_ID
    success_text = messages.APPOINTMENT_UPDATED

    def step(self, sender_id: str, state: ConversationState, text: str, lowered: str) -> Transition:
        step = ChangeStep(state.step)
        draft: AppointmentChangeDraft = state.data

        if step == ChangeStep.BABY_ID:
            baby_id = parse_numeric_id(text)
            if baby_id is None:
                return self.reprompt(state, messages.INVALID_NUMERIC_ID)
            return Transition(
                replace(state, data=replace(draft, baby_id=baby_id)),
                None,
                BackendRequest(operation="list_appointments", payload={"baby_id": baby_id}),
            )

        if step == ChangeStep.SELECT:
            position = parse_numeric_id(text)
            if position is None or position > len(draft.appointments):
                return self.reprompt(
                    state,
                    f"{messages.INVALID_SELECTION.format(count=len(draft.appointments))}\n\n"
                    f"{listing_prompt(draft)}",
                )
            chosen = draft.appointments[position - 1]
            return self.advance(state, replace(draft, selected_id=chosen.id), messages.ASK_ACTION)

        if step == ChangeStep.ACTION:
            if lowered in RESCHEDULE_OPTIONS:
                return self.goto(state, ChangeStep.RESCHEDULE, messages.ASK_NEW_DATE)
            if lowered in CANCEL_OPTIONS:
                return self.goto(state, ChangeStep.CONFIRM_CANCEL, messages.CONFIRM_DELETE)
            return self.reprompt(state, messages.INVALID_ACTION)

        if step == ChangeStep.RESCHEDULE:
            date_text, note = parse_reschedule(text)
            when = parse_date(date_text)
            if when is None:
                return self.reprompt(state, f"{messages.INVALID_DATE}\n\n{messages.ASK_NEW_DATE}")
            return Transition(
                state,
                None,
                BackendRequest(
                    operation="update_appointment",
                    resource_id=draft.selected_id,
                    payload={"appointment_date": when.isoformat(), "notes": note},
                ),
            )

        # CONFIRM_CANCEL
        if lowered == "yes":
            return Transition(
                state,
                None,
                BackendRequest(operation="delete_appointment", resource_id=draft.selected_id),
            )
        return self.goto(state, ChangeStep.ACTION, messages.ASK_ACTION)

    def resume(
        self,
        state: ConversationState,
        request: BackendRequest,
        response: BackendResponse,
    ) -> Transition:
        draft: AppointmentChangeDraft = state.data

        if request.operation == "list_appointments":
            if response.status == "not_found":
                return Transition.end(messages.NO_APPOINTMENTS.format(baby_id=draft.baby_id))
            if not response.ok:
                return self.lookup_failed(response)

            appointments = _summaries(response.data or [])
            if not appointments:
                return Transition.end(messages.NO_APPOINTMENTS.format(baby_id=draft.baby_id))
            draft = replace(draft, appointments=appointments)
            return self.goto(state, ChangeStep.SELECT, listing_prompt(draft), draft)

        if request.operation == "delete_appointment":
            return self.finish_submission(response, messages.APPOINTMENT_DELETED)
        return self.finish_submission(response, messages.APPOINTMENT_UPDATED)
