import os
import sys
import pytest

# Ensure the backend root (containing the `quizroom` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from quizroom import create_app, socketio
from quizroom.services.rooms import RoomRegistry, RoomServices, LeaderboardStore


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    PIN_LENGTH = 4
    PIN_MAX_ATTEMPTS = 100
    ROOM_IDLE_TTL_SEC = 0
    LOG_LEVEL = 'DEBUG'


class RecordingBroadcaster:
    """Stands in for the Socket.IO broadcaster in service-level tests."""

    def __init__(self):
        self.sent = []      # (target, event, data)
        self.groups = {}    # pin -> set of sids
        self.closed = []

    def to_sid(self, sid, event, data=None):
        if sid:
            self.sent.append((sid, event, data))

    def to_room(self, pin, event, data=None):
        self.sent.append((f"room:{pin}", event, data))

    def join(self, sid, pin):
        self.groups.setdefault(pin, set()).add(sid)

    def close(self, pin):
        self.closed.append(pin)
        self.groups.pop(pin, None)

    def events_for(self, target, event=None):
        return [d for (t, e, d) in self.sent if t == target and (event is None or e == event)]

    def names_for(self, target):
        return [e for (t, e, _d) in self.sent if t == target]


@pytest.fixture()
def store(tmp_path):
    return LeaderboardStore(str(tmp_path / 'leaderboards'))


@pytest.fixture()
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture()
def services(store, broadcaster):
    return RoomServices(RoomRegistry(), store, broadcaster)


@pytest.fixture()
def flask_app(tmp_path):
    config = type('TestConfig', (TestConfig,), {'LEADERBOARD_DIR': str(tmp_path / 'leaderboards')})
    application = create_app(config)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        test_client.get_received()  # flush
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            test_client.disconnect()
        except Exception:
            pass
