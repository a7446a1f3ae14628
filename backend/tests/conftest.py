"""
Shared test fixtures and configuration.
"""

import os
import tempfile

import pytest

# Set test environment variables before importing app modules
_TEST_DIR = tempfile.mkdtemp(prefix="focusflow_test_")
os.environ.setdefault("LOCAL_STORAGE_PATH", os.path.join(_TEST_DIR, "data"))
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_CONSOLE_ENABLED", "false")
os.environ.setdefault("LLM_API_KEY", "")
os.environ.setdefault("GEMINI_API_KEY", "")

from focusflow.core.history_store import HistoryStore  # noqa: E402
from focusflow.core.session_controller import SessionController  # noqa: E402
from focusflow.storage import LocalStorage  # noqa: E402


class FakeClock:
    """Deterministic millisecond clock; every call advances by one second."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1000):
        self.now = start
        self.step = step

    def __call__(self) -> int:
        self.now += self.step
        return self.now


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "data"))


@pytest.fixture
def store(storage):
    return HistoryStore(storage)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def controller(store, clock):
    counter = iter(range(1, 10_000))
    return SessionController(store, clock=clock, id_factory=lambda: f"rec-{next(counter)}")
