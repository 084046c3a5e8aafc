"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from backend import StubBackendAPI  # noqa: E402
from intake import FlowEngine  # noqa: E402
from intake.state import InMemoryConversationStore  # noqa: E402

CHW_NUMBER = "254711000111"


@pytest.fixture
def sender_id():
    """An allow-listed CHW number."""
    return CHW_NUMBER


@pytest.fixture
def store():
    return InMemoryConversationStore()


@pytest.fixture
def backend():
    return StubBackendAPI()


@pytest.fixture
def messenger():
    mock = AsyncMock()
    mock.send_text = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def engine(store, backend, messenger):
    return FlowEngine(
        store=store,
        backend=backend,
        messenger=messenger,
        authorized_senders=[CHW_NUMBER],
    )


@pytest.fixture
def chat(engine):
    """
    Send several messages from the CHW in order.

    Returns the replies to the last message.
    """
    async def _chat(*texts, sender=CHW_NUMBER):
        replies = []
        for text in texts:
            replies = await engine.handle_message(sender, text)
        return replies

    return _chat
