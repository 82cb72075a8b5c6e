from datetime import datetime, timedelta, timezone

from notelog.extensions import db
from notelog.models import User
from notelog.services.token_service import TokenService

from conftest import register


def _flip_signature(token: str) -> str:
    header, payload, signature = token.split(".")
    first = "B" if signature[0] == "A" else "A"
    return ".".join([header, payload, first + signature[1:]])


def test_register_returns_user_and_token(client):
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "A@X.com", "password": "secret1"},
    )
    assert response.status_code == 201
    data = response.get_json()
    assert data["user"]["username"] == "alice"
    assert data["user"]["email"] == "a@x.com"
    assert set(data["user"]) == {"id", "username", "email", "createdAt"}
    assert data["user"]["createdAt"].endswith("Z")
    assert data["token"]


def test_register_stores_hashed_password(app, alice):
    with app.app_context():
        user = db.session.get(User, alice["user"]["id"])
        assert user.password_hash != "secret1"
        assert user.check_password("secret1")


def test_register_duplicate_email(client, alice):
    response = client.post(
        "/api/auth/register",
        json={"username": "other", "email": "a@x.com", "password": "secret1"},
    )
    assert response.status_code == 400
    assert response.get_json() == {"message": "User already exists"}


def test_register_missing_fields(client):
    response = client.post("/api/auth/register", json={"username": "x", "email": ""})
    assert response.status_code == 400
    assert "message" in response.get_json()


def test_register_short_password(client):
    response = client.post(
        "/api/auth/register",
        json={"username": "carl", "email": "c@x.com", "password": "123"},
    )
    assert response.status_code == 400


def test_register_rejects_non_json_body(client):
    response = client.post("/api/auth/register", data="nope", content_type="text/plain")
    assert response.status_code == 400
    assert response.get_json() == {"message": "Invalid JSON body"}


def test_login_then_me(client, alice):
    response = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})
    assert response.status_code == 200
    token = response.get_json()["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.get_json()["id"] == alice["user"]["id"]
    assert me.get_json()["username"] == "alice"


def test_me_with_flipped_signature_is_401(client, alice):
    bad = _flip_signature(alice["token"])
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {bad}"})
    assert response.status_code == 401
    assert response.get_json() == {"message": "Invalid token"}


def test_login_wrong_password(client, alice):
    response = client.post("/api/auth/login", json={"email": "a@x.com", "password": "wrong!!"})
    assert response.status_code == 401
    assert response.get_json() == {"message": "Invalid credentials"}


def test_login_unknown_email(client):
    response = client.post("/api/auth/login", json={"email": "nobody@x.com", "password": "secret1"})
    assert response.status_code == 401


def test_missing_header_is_rejected(client):
    response = client.get("/api/notes")
    assert response.status_code == 401
    assert response.get_json() == {"message": "Access denied. No token provided."}


def test_non_bearer_scheme_is_rejected(client, alice):
    response = client.get("/api/notes", headers={"Authorization": f"Token {alice['token']}"})
    assert response.status_code == 401


def test_expired_token_is_rejected(app, client, alice):
    issued = datetime.now(timezone.utc) - timedelta(hours=3)
    token = TokenService.from_app(app).issue(alice["user"]["id"], now=issued)
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.get_json() == {"message": "Invalid token"}


def test_deleted_identity_token_is_rejected(app, client):
    alice = register(client, "alice", "a@x.com", password="secret1")

    created = client.post("/api/notes", json={"content": "hello"}, headers=alice["headers"])
    assert created.status_code == 201
    assert created.get_json()["userId"] == alice["user"]["id"]

    with app.app_context():
        db.session.delete(db.session.get(User, alice["user"]["id"]))
        db.session.commit()

    for method, path in [
        ("get", "/api/notes"),
        ("get", "/api/todos"),
        ("get", "/api/contacts"),
        ("get", "/api/custom-notes"),
        ("get", "/api/auth/me"),
    ]:
        response = getattr(client, method)(path, headers=alice["headers"])
        assert response.status_code == 401
        assert response.get_json() == {"message": "User no longer exists."}


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_unknown_route_is_json_404(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert "message" in response.get_json()


def test_unexpected_error_rolls_back_the_session(app, monkeypatch):
    @app.route("/boom")
    def boom():
        user = User(username="ghost", email="ghost@x.com")
        user.set_password("secret1")
        db.session.add(user)
        db.session.flush()
        raise RuntimeError("errore a metà transazione")

    rollbacks = []
    original_rollback = db.session.rollback

    def tracking_rollback():
        rollbacks.append(True)
        original_rollback()

    monkeypatch.setattr(db.session, "rollback", tracking_rollback)

    response = app.test_client().get("/boom")
    assert response.status_code == 500
    assert response.get_json() == {"message": "Server error"}
    assert rollbacks

    with app.app_context():
        assert User.query.filter_by(email="ghost@x.com").first() is None
