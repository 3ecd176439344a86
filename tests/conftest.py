# tests/conftest.py
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ticketing.plugin import register

SECRET = "averyverylongsecret"


def config():
    return {
        "auth": {"secret": SECRET},
        "storage": {"url": "sqlite://"},
    }


@pytest.fixture
def app():
    host = FastAPI()
    register(host, config())
    yield host
    host.state.storage.dispose()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_token(app):
    def _make(username="matteo", **claims):
        return app.state.authenticator.sign({"username": username, **claims})

    return _make


@pytest.fixture
def auth_headers(make_token):
    return {"Authorization": f"Bearer {make_token()}"}
