"""Main menu dispatcher for senders with no active flow."""

from typing import Dict, Sequence

from intake import messages
from intake.flows.base import Flow, Transition
from intake.state.types import ConversationState


class MainMenu:
    """
    Maps menu numbers to flows.

    Flows are numbered from 1 in the order given, matching MENU_TEXT.
    """

    def __init__(self, flows: Sequence[Flow]):
        self.options: Dict[str, Flow] = {
            str(number): flow for number, flow in enumerate(flows, start=1)
        }

    def handle(self, state: ConversationState, text: str, lowered: str) -> Transition:
        flow = self.options.get(lowered)
        if flow is not None:
            return flow.start()
        if lowered == messages.CANCEL_COMMAND:
            return Transition(state, f"{messages.NOTHING_TO_CANCEL}\n\n{messages.MENU_TEXT}")
        return Transition(state, f"{messages.INTRO_TEXT}\n\n{messages.MENU_TEXT}")
