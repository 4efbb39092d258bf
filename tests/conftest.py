import os
import pytest

from quizrace import create_app, db, socketio
from quizrace.services import clock


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_LOG_ROUNDS = 4
    CORS_ORIGINS = []
    ROOM_CODE_MAX_ATTEMPTS = 0
    STRICT_SESSION_TRANSITIONS = False
    PLAYER_NAME_MAX_LEN = 64


class FakeClock:
    def __init__(self, now=1000):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        import quizrace.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def bare_app():
    """App with no context left pushed.

    Each request then gets its own ``g``, so Flask-Login state cannot leak
    between test clients. The in-memory database survives across contexts.
    """
    application = create_app(TestConfig)
    with application.app_context():
        import quizrace.models  # noqa: F401
        db.create_all()
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def fake_clock(monkeypatch):
    fake = FakeClock()
    monkeypatch.setattr(clock, 'now_ms', fake)
    return fake


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def new_session(client):
    """Create a session from the built-in arithmetic set and return its JSON."""
    def _create(question_set_id='basic-arithmetic'):
        res = client.post('/api/sessions/create', json={'question_set_id': question_set_id})
        assert res.status_code == 201
        return res.get_json()
    return _create
