# ticketing/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from ticketing.core.errors import AuthError
from ticketing.core.logging_config import get_logger

logger = get_logger(__name__)

# auto_error=False so a missing header goes through AuthError like a bad token
bearer_scheme = HTTPBearer(auto_error=False)

IDENTITY_CLAIMS = ("username", "sub")


class Identity(BaseModel):
    username: str
    claims: dict[str, Any] = {}


class Authenticator(Protocol):
    def verify(self, token: str) -> Identity: ...


class JWTAuthenticator:
    """HMAC-signed JWTs via python-jose."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: int | None = 60,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def sign(self, claims: dict[str, Any], expires_minutes: int | None = None) -> str:
        """Issue a token; the ticket routes never call this, hosts and tests do."""
        payload = dict(claims)
        now = datetime.now(timezone.utc)
        minutes = expires_minutes if expires_minutes is not None else self.expires_minutes
        payload.setdefault("iat", now)
        if minutes is not None:
            payload.setdefault("exp", now + timedelta(minutes=minutes))
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as exc:
            raise AuthError(f"Authorization token is invalid: {exc}") from exc

        for claim in IDENTITY_CLAIMS:
            value = payload.get(claim)
            if isinstance(value, str) and value:
                return Identity(username=value, claims=payload)
        raise AuthError("Invalid token payload")


def get_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity:
    if credentials is None:
        raise AuthError("No Authorization was found in request.headers")

    authenticator: Authenticator = request.app.state.authenticator
    try:
        return authenticator.verify(credentials.credentials)
    except AuthError as exc:
        logger.debug("rejected token", extra={"reason": exc.message})
        raise


async def authenticate_request(request: Request) -> Identity:
    """Run the bearer check outside dependency injection, e.g. from an exception handler."""
    return get_identity(request, await bearer_scheme(request))
