"""
Test suite for infrastructure integration.

Verifies:
- Configuration defaults and environment overrides
- Store and backend factories
- Bootstrap wires one engine per process
"""

import pytest

from backend import RestBackendAPI, StubBackendAPI
from infra import InfraBootstrap, InfraConfig
from intake import FlowEngine
from intake.state import InMemoryConversationStore, SQLiteConversationStore
from transport.whatsapp.sender import WhatsAppSender


def make_config(**overrides) -> InfraConfig:
    values = dict(
        state_backend="memory",
        sqlite_db_path=":memory:",
        backend_mode="stub",
        backend_api_base="http://backend.test/api",
        backend_api_token=None,
        backend_timeout_s=5.0,
        whatsapp_access_token="token",
        whatsapp_phone_number_id="PHONE_ID",
        whatsapp_api_version="v20.0",
        authorized_numbers=["254711000111"],
    )
    values.update(overrides)
    return InfraConfig(**values)


@pytest.fixture(autouse=True)
def fresh_bootstrap():
    InfraBootstrap.reset()
    yield
    InfraBootstrap.reset()


class TestInfraConfig:
    """Test infrastructure configuration."""

    def test_config_from_env_defaults(self, monkeypatch):
        """Defaults need nothing but the process."""
        for key in ("STATE_BACKEND", "BACKEND_MODE", "BACKEND_TIMEOUT_S"):
            monkeypatch.delenv(key, raising=False)

        config = InfraConfig.from_env()

        assert config.state_backend == "memory"
        assert config.backend_mode == "http"
        assert config.backend_timeout_s == 30.0

    def test_config_from_env_overrides(self, monkeypatch):
        monkeypatch.setenv("STATE_BACKEND", "sqlite")
        monkeypatch.setenv("SQLITE_DB_PATH", "/tmp/chw.db")
        monkeypatch.setenv("BACKEND_MODE", "stub")
        monkeypatch.setenv("BACKEND_TIMEOUT_S", "2.5")

        config = InfraConfig.from_env()

        assert config.state_backend == "sqlite"
        assert config.sqlite_db_path == "/tmp/chw.db"
        assert config.backend_mode == "stub"
        assert config.backend_timeout_s == 2.5

    def test_creates_memory_store(self):
        assert isinstance(make_config().create_state_store(), InMemoryConversationStore)

    def test_creates_sqlite_store(self):
        store = make_config(state_backend="sqlite").create_state_store()

        assert isinstance(store, SQLiteConversationStore)
        store.close()

    def test_creates_stub_backend(self):
        assert isinstance(make_config().create_backend_api(), StubBackendAPI)

    def test_creates_rest_backend(self):
        backend = make_config(backend_mode="http", backend_api_token="secret").create_backend_api()

        assert isinstance(backend, RestBackendAPI)
        assert backend.base_url == "http://backend.test/api"
        assert backend.api_token == "secret"
        assert backend.timeout_s == 5.0


class TestInfraBootstrap:
    """Test bootstrap initialization."""

    def test_bootstrap_wires_engine(self):
        infra = InfraBootstrap(make_config())

        engine = infra.get_engine()
        assert isinstance(engine, FlowEngine)
        assert engine.store is infra.get_state_store()
        assert engine.backend is infra.get_backend_api()
        assert isinstance(engine.messenger, WhatsAppSender)
        assert engine.is_authorized("254711000111")

    def test_singleton(self):
        first = InfraBootstrap.get_instance(make_config())
        second = InfraBootstrap.get_instance(make_config(backend_mode="http"))

        assert first is second
        assert isinstance(second.get_backend_api(), StubBackendAPI)

    def test_repr(self):
        text = repr(InfraBootstrap(make_config()))

        assert "state=memory" in text
        assert "backend=stub" in text

    @pytest.mark.asyncio
    async def test_bootstrapped_engine_handles_message(self):
        infra = InfraBootstrap(make_config())
        infra.engine.messenger = None

        replies = await infra.get_engine().handle_message("254711000111", "3")

        assert replies
        assert infra.get_state_store().get("254711000111") is not None
