import os
import tempfile
from collections import defaultdict

import pytest

# Must be set before app.config.get_settings() is first called
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("APP_DEBUG", "false")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="gateway-logs-"))

from app.errors import UpstreamCallError
from app.services.chat import ChatRelay, ConnectionRegistry

FIXED_TS = 1_700_000_000_000


class Recorder:
    """Sender that records every delivery per connection."""

    def __init__(self):
        self.received = defaultdict(list)

    async def __call__(self, sid, event, payload):
        self.received[sid].append((event, payload))

    def texts(self, sid):
        return [payload["text"] for _, payload in self.received[sid]]


class FakeForwarder:
    def __init__(self, error=None):
        self.calls = []
        self.error = error
        self.closed = False

    async def forward(self, user_id, mentor_id, text):
        self.calls.append((user_id, mentor_id, text))
        if self.error is not None:
            raise self.error

    async def aclose(self):
        self.closed = True


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def forwarder():
    return FakeForwarder()


@pytest.fixture
def registry():
    return ConnectionRegistry()


@pytest.fixture
def relay(registry, forwarder, recorder):
    return ChatRelay(registry, forwarder, recorder, clock=lambda: FIXED_TS)


@pytest.fixture
def failing_forwarder():
    return FakeForwarder(error=UpstreamCallError(log_message="Error saving message: connection refused"))


@pytest.fixture
def make_relay(recorder):
    def _make(forwarder=None, single_room=False, send=None):
        return ChatRelay(
            ConnectionRegistry(single_room=single_room),
            forwarder or FakeForwarder(),
            send or recorder,
            clock=lambda: FIXED_TS,
        )
    return _make
