"""
Conversation state exports.

Clean interface for the engine to import store components.
"""

from intake.state.base import ConversationStore
from intake.state.memory import InMemoryConversationStore
from intake.state.sqlite import SQLiteConversationStore
from intake.state.types import (
    AppointmentChangeDraft,
    AppointmentDraft,
    AppointmentSummary,
    BabyDraft,
    ConversationState,
    Draft,
    FlowName,
    GuardianDraft,
    MenuDraft,
    empty_draft,
)

__all__ = [
    "ConversationStore",
    "InMemoryConversationStore",
    "SQLiteConversationStore",
    "ConversationState",
    "FlowName",
    "Draft",
    "MenuDraft",
    "GuardianDraft",
    "BabyDraft",
    "AppointmentDraft",
    "AppointmentSummary",
    "AppointmentChangeDraft",
    "empty_draft",
]
