"""
Fixture condivise: app Flask con DB SQLite temporaneo e utenti registrati.
"""

from urllib.parse import urlsplit

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from config import TestConfig
from notelog import create_app
from notelog.extensions import db


@pytest.fixture
def app(tmp_path):
    class _Config(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'notelog-test.db'}"
        LOG_DIR = str(tmp_path / "logs")

    app = create_app(_Config)
    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def register(client, username, email, password="secret1"):
    response = client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201, response.get_json()
    data = response.get_json()
    return {
        "user": data["user"],
        "token": data["token"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
    }


@pytest.fixture
def alice(client):
    return register(client, "alice", "a@x.com")


@pytest.fixture
def bob(client):
    return register(client, "bob", "b@x.com", password="hunter22")


class FlaskTestAdapter(requests.adapters.BaseAdapter):
    """Adapter requests che inoltra le richieste al test client Flask."""

    def __init__(self, flask_client):
        super().__init__()
        self.flask_client = flask_client

    def send(self, request, **kwargs):
        parts = urlsplit(request.url)
        path = parts.path + (f"?{parts.query}" if parts.query else "")
        headers = {k: v for k, v in request.headers.items() if k.lower() != "content-length"}

        flask_response = self.flask_client.open(
            path,
            method=request.method,
            headers=headers,
            data=request.body,
        )

        response = requests.Response()
        response.status_code = flask_response.status_code
        response._content = flask_response.get_data()
        response.headers = CaseInsensitiveDict(dict(flask_response.headers))
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


@pytest.fixture
def http_session(client):
    session = requests.Session()
    session.mount("http://notelog.test", FlaskTestAdapter(client))
    return session
