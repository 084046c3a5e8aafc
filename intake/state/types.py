"""
Conversation state types.

One ConversationState exists per sender with an open conversation.
States are immutable values: flows derive the next state with
dataclasses.replace instead of mutating the current one.

Each flow collects its fields into its own draft record. A field is None
until the step that collects it has accepted valid input.
"""

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class FlowName(str, Enum):
    """Which conversation a sender is in. MENU means no active flow."""

    MENU = "menu"
    REGISTER_GUARDIAN = "register_guardian"
    REGISTER_BABY = "register_baby"
    CREATE_APPOINTMENT = "create_appointment"
    MODIFY_APPOINTMENT = "modify_appointment"


# ============================================================================
# DRAFTS (fields collected so far, per flow)
# ============================================================================

@dataclass(frozen=True)
class MenuDraft:
    """The menu collects nothing."""


@dataclass(frozen=True)
class GuardianDraft:
    name: Optional[str] = None
    national_id: Optional[str] = None
    gender: Optional[str] = None              # "M" | "F"
    whatsapp_number: Optional[str] = None     # normalized 254XXXXXXXXX
    nearest_clinic: Optional[str] = None
    residence_location: Optional[str] = None


@dataclass(frozen=True)
class BabyDraft:
    guardian_national_id: Optional[str] = None
    guardian_id: Optional[int] = None         # resolved by lookup
    guardian_name: Optional[str] = None       # shown back to the CHW only
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None       # YYYY-MM-DDT00:00:00Z
    nationality: Optional[str] = None


@dataclass(frozen=True)
class AppointmentDraft:
    baby_id: Optional[int] = None
    appointment_date: Optional[str] = None    # YYYY-MM-DD
    notes: Optional[str] = None
    created_by: Optional[str] = None          # CHW sender id


@dataclass(frozen=True)
class AppointmentSummary:
    """One appointment as returned by the backend listing."""

    id: Union[int, str]
    appointment_date: str
    notes: str = ""


@dataclass(frozen=True)
class AppointmentChangeDraft:
    baby_id: Optional[int] = None
    appointments: Tuple[AppointmentSummary, ...] = ()
    selected_id: Optional[Union[int, str]] = None


Draft = Union[MenuDraft, GuardianDraft, BabyDraft, AppointmentDraft, AppointmentChangeDraft]

DRAFT_TYPES: Dict[FlowName, type] = {
    FlowName.MENU: MenuDraft,
    FlowName.REGISTER_GUARDIAN: GuardianDraft,
    FlowName.REGISTER_BABY: BabyDraft,
    FlowName.CREATE_APPOINTMENT: AppointmentDraft,
    FlowName.MODIFY_APPOINTMENT: AppointmentChangeDraft,
}


def empty_draft(flow: FlowName) -> Draft:
    """Return a draft with nothing collected for the given flow."""
    return DRAFT_TYPES[flow]()


# ============================================================================
# CONVERSATION STATE
# ============================================================================

@dataclass(frozen=True)
class ConversationState:
    """
    Current position of one sender's conversation.

    step is 0 for the menu and starts at 1 inside a flow. Each flow
    names its steps with an IntEnum, so the stored integer and the
    named step are interchangeable.
    """

    flow: FlowName = FlowName.MENU
    step: int = 0
    data: Draft = field(default_factory=MenuDraft)

    @classmethod
    def start(cls, flow: FlowName) -> "ConversationState":
        """Fresh state positioned at the first step of a flow."""
        return cls(flow=flow, step=1, data=empty_draft(flow))

    @property
    def is_menu(self) -> bool:
        return self.flow == FlowName.MENU

    def to_dict(self) -> Dict[str, Any]:
        """
        Plain-dict form used by persistent stores.

        Fields that have not been collected yet are left out, so a freshly
        started flow serializes with an empty data mapping.
        """
        collected = {
            key: value
            for key, value in asdict(self.data).items()
            if value is not None and value != ()
        }
        if "appointments" in collected:
            collected["appointments"] = [dict(item) for item in collected["appointments"]]
        return {"flow": self.flow.value, "step": self.step, "data": collected}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ConversationState":
        """Rebuild a state from to_dict() output. Unknown data keys are ignored."""
        flow = FlowName(raw.get("flow", FlowName.MENU.value))
        draft_type = DRAFT_TYPES[flow]
        known = {f.name for f in fields(draft_type)}
        values = {k: v for k, v in (raw.get("data") or {}).items() if k in known}

        if "appointments" in values:
            values["appointments"] = tuple(
                AppointmentSummary(**item) for item in values["appointments"]
            )

        return cls(flow=flow, step=int(raw.get("step", 0)), data=draft_type(**values))
