"""
Flow engine.

Processing of one inbound text message:

    authorization -> per-sender lock -> state lookup -> route
        (menu, universal cancel, or active flow step)
    -> execute requested backend calls, resuming the flow after each
    -> commit the resulting state -> send replies

Messages from the same sender are processed one at a time (an
asyncio.Lock per sender). Different senders never wait on each other.
"""

import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Protocol

from backend.base import BackendAPI
from intake import messages
from intake.flows import Flow, MainMenu, Transition, default_flows
from intake.state.base import ConversationStore
from intake.state.types import ConversationState, FlowName
from intake.validators import normalize_sender_id

logger = logging.getLogger(__name__)


class Messenger(Protocol):
    """Outbound text channel. Implementations log their own failures."""

    async def send_text(self, to: str, body: str) -> bool:
        ...


class FlowEngine:
    """
    Owns the conversation store and drives the flows.

    Args:
        store: Conversation store (in-memory, SQLite, ...)
        backend: Backend API used for lookups and submissions
        messenger: Optional outbound channel; replies are still returned without one
        authorized_senders: Allow-list of sender ids. Empty denies everyone.
        flows: Flows in menu order (defaults to the four intake flows)
    """

    def __init__(
        self,
        store: ConversationStore,
        backend: BackendAPI,
        messenger: Optional[Messenger] = None,
        authorized_senders: Iterable[str] = (),
        flows: Optional[List[Flow]] = None,
    ):
        self.store = store
        self.backend = backend
        self.messenger = messenger
        self.authorized_senders = frozenset(
            digits for digits in (normalize_sender_id(s) for s in authorized_senders) if digits
        )

        flows = flows if flows is not None else default_flows()
        self.flows: Dict[FlowName, Flow] = {flow.name: flow for flow in flows}
        self.menu = MainMenu(flows)
        self._locks: Dict[str, asyncio.Lock] = {}

    def is_authorized(self, sender_id: str) -> bool:
        return normalize_sender_id(sender_id) in self.authorized_senders

    def _lock_for(self, sender_id: str) -> asyncio.Lock:
        lock = self._locks.get(sender_id)
        if lock is None:
            lock = self._locks[sender_id] = asyncio.Lock()
        return lock

    async def handle_message(self, sender_id: str, text: str) -> List[str]:
        """
        Process one inbound text message and send the replies.

        Returns:
            The reply texts, in the order they were sent
        """
        sender = normalize_sender_id(sender_id)

        if not self.is_authorized(sender):
            logger.warning(f"Rejected message from unauthorized sender {sender}")
            await self._send(sender, messages.ACCESS_DENIED)
            return [messages.ACCESS_DENIED]

        async with self._lock_for(sender):
            replies = await self._process(sender, text)
            for reply in replies:
                await self._send(sender, reply)
        return replies

    def route(
        self,
        sender_id: str,
        state: ConversationState,
        text: str,
        lowered: str,
    ) -> Transition:
        """Pick the handler for the message. Pure: no store or network access."""
        if state.is_menu:
            return self.menu.handle(state, text, lowered)

        if lowered == messages.CANCEL_COMMAND:
            logger.info(
                f"Sender {sender_id} cancelled {state.flow.value} at step {state.step}",
                extra={"sender_id": sender_id, "flow": state.flow.value, "step": state.step},
            )
            return Transition.end(f"{messages.CANCELLED}\n\n{messages.MENU_TEXT}")

        return self.flows[state.flow].step(sender_id, state, text, lowered)

    async def _process(self, sender_id: str, text: str) -> List[str]:
        raw = (text or "").strip()
        lowered = raw.lower()
        state = self.store.get(sender_id) or ConversationState()

        replies: List[str] = []
        try:
            transition = self.route(sender_id, state, raw, lowered)
            while True:
                if transition.reply:
                    replies.append(transition.reply)
                if transition.request is None:
                    break

                request = transition.request
                logger.info(
                    f"Backend call {request.operation} for {sender_id}",
                    extra={"sender_id": sender_id, "operation": request.operation},
                )
                response = await self.backend.execute(request)
                if not response.ok:
                    logger.warning(
                        f"Backend {request.operation} returned {response.status}",
                        extra={
                            "sender_id": sender_id,
                            "operation": request.operation,
                            "status_code": response.status_code,
                        },
                    )
                flow = self.flows[transition.state.flow]
                transition = flow.resume(transition.state, request, response)

        except Exception as e:
            # One bad message must not take the sender (or the server) down
            logger.error(f"Error processing message from {sender_id}: {e}", exc_info=True)
            self.store.delete(sender_id)
            return [messages.UNEXPECTED_ERROR]

        self._commit(sender_id, transition.state)
        return replies

    def _commit(self, sender_id: str, state: Optional[ConversationState]) -> None:
        if state is None:
            self.store.delete(sender_id)
            logger.info(f"Conversation ended for {sender_id}", extra={"sender_id": sender_id})
        else:
            self.store.set(sender_id, state)

    async def _send(self, to: str, body: str) -> None:
        if self.messenger is None:
            return
        await self.messenger.send_text(to, body)
