from sqlalchemy.exc import OperationalError

from inventory_backend.app.api.endpoints import auth as auth_endpoint
from inventory_backend.app.core.config import settings
from inventory_backend.app.core.security import create_access_token, hash_password, verify_password
from inventory_backend.app.db.models.models_v1 import User


def _signup(client, email="ops@example.com", password="Stock2026pass"):
    return client.post(
        "/api/auth/signup",
        json={"name": "Ops", "email": email, "password": password, "confirm_password": password},
    )


def _login(client, email="ops@example.com", password="Stock2026pass"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


# ---------- health ----------
def test_health_ok(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "db": True}


def test_health_degraded_when_store_unreachable(client, monkeypatch):
    from sqlalchemy.orm import Session

    def _boom(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(Session, "execute", _boom)

    resp = client.get("/health")

    assert resp.status_code == 503
    assert resp.json() == {"status": "degraded", "db": False, "error": "OperationalError"}


# ---------- auth ----------
def test_signup_login_me(client, db_session):
    signup = _signup(client)
    assert signup.status_code == 201, signup.text
    user_id = signup.json()["user_id"]

    stored = db_session.get(User, user_id)
    assert stored.password_hash != "Stock2026pass"
    assert verify_password("Stock2026pass", stored.password_hash)

    login = _login(client)
    assert login.status_code == 200
    token = login.json()["access_token"]
    assert login.json()["token_type"] == "bearer"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json() == {"user_id": user_id, "name": "Ops", "email": "ops@example.com"}


def test_signup_password_mismatch(client):
    resp = client.post(
        "/api/auth/signup",
        json={
            "name": "Ops",
            "email": "ops@example.com",
            "password": "Stock2026pass",
            "confirm_password": "Stock2026pas",
        },
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Passwords do not match"}


def test_signup_duplicate_email(client):
    assert _signup(client).status_code == 201
    resp = _signup(client, email="OPS@example.com")

    assert resp.status_code == 409


def test_signup_duplicate_email_lost_race_is_409(client, monkeypatch):
    assert _signup(client).status_code == 201
    monkeypatch.setattr(auth_endpoint, "_find_user", lambda *args, **kwargs: None)

    resp = _signup(client)

    assert resp.status_code == 409
    assert resp.json() == {"error": "Email already registered"}


def test_login_with_wrong_password(client):
    _signup(client)

    resp = _login(client, password="not-the-password1")

    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid email or password"}


def test_me_rejects_missing_and_bad_tokens(client):
    assert client.get("/api/auth/me").status_code == 401

    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Token is invalid"}

    expired = create_access_token("1", expires_minutes=-1)
    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Token has expired"}


def test_resources_open_unless_auth_required(client, monkeypatch, db_session):
    assert client.get("/api/products").status_code == 200

    monkeypatch.setattr(settings, "AUTH_REQUIRED", True)
    assert client.get("/api/products").status_code == 401

    db_session.add(User(name="Ops", email="ops@example.com", password_hash=hash_password("Stock2026pass")))
    db_session.commit()
    token = _login(client).json()["access_token"]

    resp = client.get("/api/products", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    # health stays public
    assert client.get("/health").status_code == 200
