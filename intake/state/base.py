"""
Abstract conversation store interface.

The flow engine depends only on this interface, not on specific
implementations. Stores are swappable through infra configuration.
"""

from abc import ABC, abstractmethod
from typing import Optional

from intake.state.types import ConversationState


class ConversationStore(ABC):
    """
    Sender id -> ConversationState mapping.

    Key properties:
    - Operations never raise; failures are logged by the implementation
    - A failed read behaves exactly like "no conversation"
    - No persistence guarantee is implied by the interface
    """

    @abstractmethod
    def get(self, sender_id: str) -> Optional[ConversationState]:
        """Return the sender's current state, or None if there is none."""
        raise NotImplementedError

    @abstractmethod
    def set(self, sender_id: str, state: ConversationState) -> None:
        """Store (or replace) the sender's state."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, sender_id: str) -> None:
        """Forget the sender's state. Deleting a missing entry is a no-op."""
        raise NotImplementedError
