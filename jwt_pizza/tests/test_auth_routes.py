from fastapi import Depends
from sqlalchemy.orm import Session

from conftest import bearer
from jwt_pizza.core.database import get_db
from jwt_pizza.core.deps import get_store
from jwt_pizza.core.errors import StorageUnavailable
from jwt_pizza.models import AuthToken
from jwt_pizza.services.credential_store import SqlCredentialStore


def test_register_login_logout_flow(client):
    r = client.post("/api/auth", json={"name": "A", "email": "a@x.com", "password": "pw1"})
    assert r.status_code == 200
    user_id = r.json()["user"]["id"]
    assert r.json()["user"]["roles"] == [{"role": "diner", "objectId": None}]

    r = client.put("/api/auth", json={"email": "a@x.com", "password": "pw1"})
    assert r.status_code == 200
    t1 = r.json()["token"]

    r = client.get("/api/user/me", headers=bearer(t1))
    assert r.status_code == 200
    assert r.json()["id"] == user_id

    r = client.delete("/api/auth", headers=bearer(t1))
    assert r.status_code == 200
    assert r.json() == {"message": "logout successful"}

    r = client.get("/api/user/me", headers=bearer(t1))
    assert r.status_code == 401
    assert r.json() == {"message": "unauthorized"}


def test_login_with_wrong_password(client, make_user):
    make_user(email="a@x.com", password="pw1")

    r = client.put("/api/auth", json={"email": "a@x.com", "password": "wrongpw"})
    assert r.status_code == 401
    assert r.json() == {"message": "invalid credentials"}

    r = client.put("/api/auth", json={"email": "missing@x.com", "password": "wrongpw"})
    assert r.status_code == 401
    assert r.json() == {"message": "invalid credentials"}


def test_logout_requires_authentication(client):
    r = client.delete("/api/auth")
    assert r.status_code == 401
    assert r.json() == {"message": "unauthorized"}


def test_garbage_token_is_anonymous_not_error(client):
    r = client.get("/api/order/menu", headers=bearer("invalid.token.here"))
    assert r.status_code == 200
    r = client.get("/api/user/me", headers=bearer("invalid.token.here"))
    assert r.status_code == 401


def test_register_duplicate_email(client):
    body = {"name": "A", "email": "dup@x.com", "password": "pw1"}
    assert client.post("/api/auth", json=body).status_code == 200
    r = client.post("/api/auth", json=body)
    assert r.status_code == 409


def test_seeded_admin_can_login(client, login):
    token = login("a@jwt.com", "admin")
    r = client.get("/api/user/me", headers=bearer(token))
    assert r.json()["roles"] == [{"role": "admin", "objectId": None}]


def test_docs_and_health(client):
    r = client.get("/")
    assert r.json()["message"] == "welcome to JWT Pizza"
    endpoints = client.get("/api/docs").json()["endpoints"]
    methods = {e["method"] for e in endpoints}
    assert {"GET", "POST", "PUT", "DELETE"} <= methods
    assert all({"method", "path", "description"} <= set(e) for e in endpoints)


def test_logout_on_one_device_keeps_other_sessions(client, make_user, login):
    make_user(email="a@x.com", password="pw1")
    phone = login("a@x.com", "pw1")
    laptop = login("a@x.com", "pw1")

    assert client.delete("/api/auth", headers=bearer(phone)).status_code == 200

    assert client.get("/api/user/me", headers=bearer(phone)).status_code == 401
    r = client.get("/api/user/me", headers=bearer(laptop))
    assert r.status_code == 200
    assert r.json()["email"] == "a@x.com"


class StoreWithBrokenWrites:
    def __init__(self, inner, broken):
        self.inner = inner
        self.broken = broken

    def __getattr__(self, name):
        if name in self.broken:
            def fail(*args, **kwargs):
                raise StorageUnavailable(f"unable to {name}")

            return fail
        return getattr(self.inner, name)


def break_store_writes(app, *broken):
    def override(db: Session = Depends(get_db)):
        return StoreWithBrokenWrites(SqlCredentialStore(db), broken)

    app.dependency_overrides[get_store] = override


def test_login_write_failure_is_500_without_token(app, client, make_user, db):
    make_user(email="a@x.com", password="pw1")
    break_store_writes(app, "insert_active_token")

    r = client.put("/api/auth", json={"email": "a@x.com", "password": "pw1"})

    app.dependency_overrides.clear()
    assert r.status_code == 500
    assert r.json() == {"message": "unable to insert_active_token"}
    assert "token" not in r.json()
    assert db.query(AuthToken).count() == 0


def test_logout_write_failure_is_500_and_session_survives(app, client, make_user, login):
    make_user(email="a@x.com", password="pw1")
    token = login("a@x.com", "pw1")
    break_store_writes(app, "delete_active_token")

    r = client.delete("/api/auth", headers=bearer(token))

    app.dependency_overrides.clear()
    assert r.status_code == 500
    assert set(r.json()) == {"message"}
    assert client.get("/api/user/me", headers=bearer(token)).status_code == 200


def test_unknown_endpoint_and_bad_body_use_message_shape(client):
    r = client.get("/api/nowhere")
    assert r.status_code == 404
    assert r.json() == {"message": "unknown endpoint"}

    r = client.put("/api/auth", json={"email": "not-an-email", "password": "pw"})
    assert r.status_code == 422
    assert set(r.json()) == {"message"}
    assert r.json()["message"].startswith("email")
