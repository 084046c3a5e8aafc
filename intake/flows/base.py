"""
Shared flow contract.

A flow is a set of pure transition functions:

    step(sender_id, state, text, lowered)  -> Transition
    resume(state, request, response)       -> Transition

A Transition says what the sender's state becomes (None deletes it),
what to reply, and optionally which backend call to make. The engine
performs the call and hands the result back to resume(). Flows never
touch the store, the network or the clock of another component.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Optional

from backend.types import BackendRequest, BackendResponse
from intake import messages
from intake.state.types import ConversationState, Draft, FlowName
from intake.validators import excerpt

YES = {"y", "yes"}
NO = {"n", "no"}


@dataclass(frozen=True)
class Transition:
    """Outcome of one step: next state (None = delete), reply, backend call."""

    state: Optional[ConversationState]
    reply: Optional[str] = None
    request: Optional[BackendRequest] = None

    @classmethod
    def end(cls, reply: str) -> "Transition":
        """Terminate the flow: state deleted, final reply sent."""
        return cls(state=None, reply=reply)

    @property
    def terminates(self) -> bool:
        return self.state is None


class Flow(ABC):
    """Base class for a numbered step sequence collecting one record."""

    name: FlowName
    first_prompt: str
    success_text: str

    def start(self) -> Transition:
        """Open the flow at step 1 with an empty draft."""
        return Transition(ConversationState.start(self.name), self.first_prompt)

    @abstractmethod
    def step(
        self,
        sender_id: str,
        state: ConversationState,
        text: str,
        lowered: str,
    ) -> Transition:
        """Consume one message at the current step."""
        raise NotImplementedError

    def submission(self, sender_id: str, draft: Draft) -> BackendRequest:
        """Backend call made when the CHW confirms with Y."""
        raise NotImplementedError(f"{self.name.value} has no Y/N confirmation step")

    def resume(
        self,
        state: ConversationState,
        request: BackendRequest,
        response: BackendResponse,
    ) -> Transition:
        """Continue after a backend call. Default: the call was the final submission."""
        return self.finish_submission(response, self.success_text)

    # ------------------------------------------------------------------
    # helpers shared by the concrete flows
    # ------------------------------------------------------------------

    @staticmethod
    def reprompt(state: ConversationState, reply: str) -> Transition:
        """Validation failed: same step, same draft."""
        return Transition(state, reply)

    @staticmethod
    def advance(state: ConversationState, draft: Draft, prompt: str) -> Transition:
        """Store the updated draft and move to the next step."""
        return Transition(replace(state, step=state.step + 1, data=draft), prompt)

    @staticmethod
    def goto(state: ConversationState, step: int, prompt: str, draft: Optional[Draft] = None) -> Transition:
        return Transition(
            replace(state, step=int(step), data=state.data if draft is None else draft),
            prompt,
        )

    def restart(self) -> Transition:
        """Back to step 1 with every collected field dropped."""
        return Transition(
            ConversationState.start(self.name),
            f"{messages.RESTARTING}\n\n{self.first_prompt}",
        )

    def confirm(self, sender_id: str, state: ConversationState, lowered: str) -> Transition:
        """Confirmation step: Y submits, N restarts, anything else asks again."""
        if lowered in YES:
            return Transition(state, None, self.submission(sender_id, state.data))
        if lowered in NO:
            return self.restart()
        return self.reprompt(state, messages.CONFIRM_REPROMPT)

    @staticmethod
    def finish_submission(response: BackendResponse, success_text: str) -> Transition:
        if response.ok:
            return Transition.end(f"{success_text}\n\n{messages.MENU_TEXT}")
        return Transition.end(messages.SUBMISSION_FAILED.format(error=excerpt(response.error)))

    @staticmethod
    def lookup_failed(response: BackendResponse) -> Transition:
        return Transition.end(messages.LOOKUP_FAILED.format(error=excerpt(response.error)))
