import pytest
from fastapi.testclient import TestClient

from jwt_pizza.core.config import Settings
from jwt_pizza.core.roles import Role, RoleAssignment
from jwt_pizza.main import create_app
from jwt_pizza.services.credential_store import SqlCredentialStore


TEST_SECRET = "test-secret-key-for-jwt-pizza-tests-only"


@pytest.fixture
def settings():
    return Settings(
        env="test",
        jwt_secret=TEST_SECRET,
        database_url="sqlite://",
        bcrypt_rounds=4,
        log_level="DEBUG",
        admin_email="a@jwt.com",
        admin_password="admin",
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    yield app
    app.state.engine.dispose()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db):
    return SqlCredentialStore(db)


@pytest.fixture
def sessions(app):
    return app.state.session_manager


@pytest.fixture
def codec(app):
    return app.state.codec


@pytest.fixture
def make_user(store, sessions):
    def _make(name="Pizza Diner", email="d@jwt.com", password="diner", roles=None):
        roles = roles if roles is not None else [RoleAssignment(Role.diner.value)]
        return store.create_user(name, email, sessions.hash_password(password), roles)

    return _make


@pytest.fixture
def login(client):
    def _login(email, password):
        r = client.put("/api/auth", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        return r.json()["token"]

    return _login


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
