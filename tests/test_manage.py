import manage


def test_create_db_is_idempotent(app):
    assert manage.create_db(app) is True
    assert manage.create_db(app) is True


def test_delete_user_unknown_email(app):
    assert manage.delete_user(app, "ghost@x.com") is False


def test_delete_user_revokes_tokens(app, client, alice):
    assert manage.delete_user(app, " A@X.com ") is True
    response = client.get("/api/auth/me", headers=alice["headers"])
    assert response.status_code == 401
