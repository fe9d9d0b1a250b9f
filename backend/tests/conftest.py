import pytest

from chatbot import gemini_api


class ManualHandle:
    def __init__(self, scheduler, delay_s, callback):
        self.scheduler = scheduler
        self.delay_s = delay_s
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose timers only fire when the test advances the clock."""

    def __init__(self):
        self.now = 0.0
        self._pending = []

    def call_later(self, delay_s, callback):
        h = ManualHandle(self, self.now + delay_s, callback)
        self._pending.append(h)
        return h

    def advance(self, seconds):
        self.now += seconds
        due = [h for h in self._pending if h.delay_s <= self.now]
        self._pending = [h for h in self._pending if h.delay_s > self.now]
        for h in sorted(due, key=lambda h: h.delay_s):
            if not h.cancelled:
                h.callback()

    @property
    def active(self):
        return [h for h in self._pending if not h.cancelled]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture(autouse=True)
def no_network(monkeypatch):
    """Prevent accidental network calls in unit tests by stubbing socket.create_connection."""

    import socket

    def fake_create_connection(*a, **k):
        raise RuntimeError("Network calls disabled in tests")

    monkeypatch.setattr(socket, "create_connection", fake_create_connection)


@pytest.fixture(autouse=True)
def mock_gemini_client(monkeypatch):
    """Replace the upstream call with a harmless fake returning a fixed reply.

    Tests that exercise the real wrapper import `generate_content` directly and
    drive it through an httpx.MockTransport.
    """

    async def fake_generate_content(message, **_k):
        return "Test fake reply"

    monkeypatch.setattr(gemini_api, "generate_content", fake_generate_content)
    monkeypatch.setattr(gemini_api, "API_KEY", None)

    yield
