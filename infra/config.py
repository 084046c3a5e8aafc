"""
Infrastructure configuration system.

Environment-based backend selection with sensible defaults.
The default stack needs nothing but the process: in-memory conversation
state and the REST backend at BACKEND_API_BASE.
"""

import os
from dataclasses import dataclass, field
from typing import List, Literal, Optional

from backend import BackendAPI, RestBackendAPI, StubBackendAPI
from config import Config
from intake.state import ConversationStore, InMemoryConversationStore, SQLiteConversationStore

StateBackendType = Literal["memory", "sqlite"]
BackendModeType = Literal["http", "stub"]


@dataclass
class InfraConfig:
    """Infrastructure configuration from environment."""

    # Conversation state
    state_backend: StateBackendType
    sqlite_db_path: str

    # Backend API
    backend_mode: BackendModeType
    backend_api_base: str
    backend_api_token: Optional[str]
    backend_timeout_s: float

    # WhatsApp
    whatsapp_access_token: str
    whatsapp_phone_number_id: str
    whatsapp_api_version: str

    # Authorization
    authorized_numbers: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> "InfraConfig":
        """
        Load configuration from environment variables.

        Defaults:
        - State: memory (lost on restart)
        - Backend: http against BACKEND_API_BASE
        """
        return cls(
            state_backend=os.getenv("STATE_BACKEND", "memory"),  # type: ignore
            sqlite_db_path=os.getenv("SQLITE_DB_PATH", "./conversations.db"),

            backend_mode=os.getenv("BACKEND_MODE", "http"),  # type: ignore
            backend_api_base=Config.BACKEND_API_BASE,
            backend_api_token=Config.BACKEND_API_TOKEN or None,
            backend_timeout_s=float(os.getenv("BACKEND_TIMEOUT_S", "30")),

            whatsapp_access_token=Config.WHATSAPP_ACCESS_TOKEN,
            whatsapp_phone_number_id=Config.WHATSAPP_PHONE_NUMBER_ID,
            whatsapp_api_version=Config.WHATSAPP_API_VERSION,

            authorized_numbers=list(Config.AUTHORIZED_NUMBERS),
        )

    def create_state_store(self) -> ConversationStore:
        """Create conversation store instance based on configuration."""
        if self.state_backend == "sqlite":
            return SQLiteConversationStore(self.sqlite_db_path)
        # Default to memory
        return InMemoryConversationStore()

    def create_backend_api(self) -> BackendAPI:
        """Create backend API client based on configuration."""
        if self.backend_mode == "stub":
            return StubBackendAPI()
        # Default to http
        return RestBackendAPI(
            base_url=self.backend_api_base,
            api_token=self.backend_api_token,
            timeout_s=self.backend_timeout_s,
        )


def get_config() -> InfraConfig:
    """Get infrastructure configuration."""
    return InfraConfig.from_env()
