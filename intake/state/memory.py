"""
In-memory conversation store.

Default store for the service and for tests. Contents are lost when the
process restarts; a sender mid-flow simply lands back on the menu.
"""

import logging
from typing import Dict, Optional

from intake.state.base import ConversationStore
from intake.state.types import ConversationState

logger = logging.getLogger(__name__)


class InMemoryConversationStore(ConversationStore):
    """Dict-backed store, one entry per sender."""

    def __init__(self):
        self.storage: Dict[str, ConversationState] = {}

    def get(self, sender_id: str) -> Optional[ConversationState]:
        return self.storage.get(sender_id)

    def set(self, sender_id: str, state: ConversationState) -> None:
        self.storage[sender_id] = state
        logger.debug(f"State for {sender_id} set to {state.flow.value}:{state.step}")

    def delete(self, sender_id: str) -> None:
        if self.storage.pop(sender_id, None) is not None:
            logger.debug(f"State for {sender_id} cleared")

    def __len__(self) -> int:
        return len(self.storage)
