"""
Infrastructure initialization and bootstrap.

Singleton pattern for wiring store, backend API, WhatsApp sender and the
flow engine from configuration.
"""

from typing import Optional

from backend import BackendAPI
from intake import FlowEngine
from intake.state import ConversationStore
from transport.whatsapp.sender import WhatsAppSender

from .config import InfraConfig, get_config


class InfraBootstrap:
    """
    Bootstrap infrastructure based on configuration.

    Singleton pattern - single instance per process, so every webhook
    delivery sees the same conversation store.
    """

    _instance: Optional["InfraBootstrap"] = None

    def __init__(self, config: Optional[InfraConfig] = None):
        """Initialize bootstrap with configuration."""
        self.config = config or get_config()
        self.state_store = self.config.create_state_store()
        self.backend_api = self.config.create_backend_api()
        self.sender = WhatsAppSender(
            access_token=self.config.whatsapp_access_token,
            phone_number_id=self.config.whatsapp_phone_number_id,
            api_version=self.config.whatsapp_api_version,
        )
        self.engine = FlowEngine(
            store=self.state_store,
            backend=self.backend_api,
            messenger=self.sender,
            authorized_senders=self.config.authorized_numbers,
        )

    @classmethod
    def get_instance(cls, config: Optional[InfraConfig] = None) -> "InfraBootstrap":
        """
        Get singleton instance.

        Args:
            config: Optional custom configuration (only used first time)

        Returns:
            Singleton InfraBootstrap instance
        """
        if cls._instance is None:
            cls._instance = cls(config)
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset singleton (for testing)."""
        cls._instance = None

    def get_state_store(self) -> ConversationStore:
        return self.state_store

    def get_backend_api(self) -> BackendAPI:
        return self.backend_api

    def get_engine(self) -> FlowEngine:
        return self.engine

    def __repr__(self) -> str:
        """String representation showing configured backends."""
        return (
            f"InfraBootstrap(state={self.config.state_backend}, "
            f"backend={self.config.backend_mode}, "
            f"authorized={len(self.config.authorized_numbers)})"
        )


def bootstrap_infrastructure(config: Optional[InfraConfig] = None) -> InfraBootstrap:
    """
    Bootstrap infrastructure (creates singleton).

    Args:
        config: Optional custom configuration

    Returns:
        InfraBootstrap singleton instance
    """
    return InfraBootstrap.get_instance(config)


def get_engine() -> FlowEngine:
    """Flow engine of the process-wide bootstrap."""
    return InfraBootstrap.get_instance().get_engine()
