import base64
import json
import pytest
from fastapi.testclient import TestClient
from itsdangerous import TimestampSigner
from blog.config import Settings
from blog.main import create_app
from blog.repository import ArticleRepository, UserRepository

@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        SECRET_KEY="test-secret",
        BCRYPT_ROUNDS=4,
        RATE_LIMIT_ENABLED=False,
        LOG_LEVEL="WARNING",
    )

@pytest.fixture
def app(settings):
    return create_app(settings)

@pytest.fixture
def client(app):
    return TestClient(app)

@pytest.fixture
def db(app):
    session = app.state.db.SessionLocal()
    yield session
    session.close()

@pytest.fixture
def articles(db):
    return ArticleRepository(db)

@pytest.fixture
def users(db):
    return UserRepository(db)

@pytest.fixture
def session_data(client, settings):
    """Reads the signed session cookie back into a dict."""
    def read():
        raw = client.cookies.get(settings.SESSION_COOKIE)
        if raw is None:
            return {}
        payload = TimestampSigner(settings.SECRET_KEY).unsign(raw)
        return json.loads(base64.b64decode(payload))
    return read

@pytest.fixture
def logged_in(client):
    client.post("/register", data={"username": "alice", "password": "s3cret"})
    r = client.post("/login", data={"username": "alice", "password": "s3cret"}, follow_redirects=False)
    assert r.status_code == 302
    return client
