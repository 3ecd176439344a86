# tests/test_security.py
import pytest

from ticketing.core.errors import AuthError
from ticketing.core.security import JWTAuthenticator


@pytest.fixture
def authenticator():
    return JWTAuthenticator("averyverylongsecret")


def test_sign_and_verify(authenticator):
    token = authenticator.sign({"username": "matteo"})
    identity = authenticator.verify(token)
    assert identity.username == "matteo"
    assert "exp" in identity.claims


def test_username_wins_over_sub(authenticator):
    token = authenticator.sign({"username": "matteo", "sub": "42"})
    assert authenticator.verify(token).username == "matteo"


def test_expired_token(authenticator):
    token = authenticator.sign({"username": "matteo"}, expires_minutes=-1)
    with pytest.raises(AuthError) as exc:
        authenticator.verify(token)
    assert exc.value.status_code == 401


def test_token_without_expiry():
    authenticator = JWTAuthenticator("averyverylongsecret", expires_minutes=None)
    token = authenticator.sign({"username": "matteo"})
    identity = authenticator.verify(token)
    assert "exp" not in identity.claims


def test_wrong_algorithm_is_rejected(authenticator):
    other = JWTAuthenticator("averyverylongsecret", algorithm="HS512")
    with pytest.raises(AuthError):
        authenticator.verify(other.sign({"username": "matteo"}))


def test_garbage_token(authenticator):
    with pytest.raises(AuthError, match="Authorization token is invalid"):
        authenticator.verify("abc.def.ghi")
