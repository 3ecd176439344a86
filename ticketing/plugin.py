# ticketing/plugin.py
"""Composition root: wires the storage and auth bindings into one mountable ticket app.

The host owns its bindings. ``register`` only builds a storage or auth binding
when ``host.state`` does not already carry one, and publishes what it builds so
later registrations reuse it.
"""

from typing import Any, Mapping

from fastapi import FastAPI
from pydantic import BaseModel, Field, model_validator
from pydantic import ValidationError as PydanticValidationError
from starlette.routing import Match, Mount
from starlette.types import Scope

from ticketing.core.database import StorageBinding
from ticketing.core.errors import ConfigurationError
from ticketing.core.handlers import install_exception_handlers
from ticketing.core.logging_config import get_logger
from ticketing.core.security import Authenticator, JWTAuthenticator
from ticketing.ticket.routes import router as ticket_router

logger = get_logger(__name__)

DEFAULT_PREFIX = "/tickets"

# accepted spellings for each option group
AUTH_KEYS = ("auth", "jwt")
STORAGE_KEYS = ("storage", "mongodb", "mongo")


class AuthOptions(BaseModel):
    secret: str = Field(..., min_length=1)
    algorithm: str = "HS256"
    expires_minutes: int | None = 60


class StorageOptions(BaseModel):
    url: str | None = None
    engine: Any = None

    @model_validator(mode="after")
    def _url_or_engine(self):
        if not self.url and self.engine is None:
            raise ValueError("either 'url' or 'engine' is required")
        return self


class PrefixMount(Mount):
    """Mount that also answers the bare prefix instead of redirecting it to ``prefix/``."""

    def matches(self, scope: Scope) -> tuple[Match, Scope]:
        bare = scope.get("root_path", "") + self.path
        if scope["type"] == "http" and scope["path"] == bare:
            scope = {**scope, "path": bare + "/"}
            match, child_scope = super().matches(scope)
            if match != Match.NONE:
                child_scope["path"] = scope["path"]
            return match, child_scope
        return super().matches(scope)


def _option_group(config: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if config.get(key) is not None:
            return config[key]
    return None


def build_authenticator(config: Mapping[str, Any]) -> JWTAuthenticator:
    raw = _option_group(config, AUTH_KEYS)
    if raw is None:
        raise ConfigurationError("missing 'auth' options")
    try:
        opts = AuthOptions.model_validate(raw)
    except PydanticValidationError as exc:
        raise ConfigurationError(f"invalid 'auth' options: {exc}") from exc
    logger.info("auth binding created", extra={"algorithm": opts.algorithm})
    return JWTAuthenticator(
        opts.secret, algorithm=opts.algorithm, expires_minutes=opts.expires_minutes
    )


def build_storage(config: Mapping[str, Any]) -> StorageBinding:
    raw = _option_group(config, STORAGE_KEYS)
    if raw is None:
        raise ConfigurationError("missing 'storage' options")
    try:
        opts = StorageOptions.model_validate(raw)
    except PydanticValidationError as exc:
        raise ConfigurationError(f"invalid 'storage' options: {exc}") from exc
    if opts.engine is not None:
        storage = StorageBinding(opts.engine)
    else:
        storage = StorageBinding.from_url(opts.url)
    logger.info("storage binding created", extra={"url": str(storage.engine.url)})
    return storage


def compose(
    config: Mapping[str, Any] | None = None,
    *,
    storage: StorageBinding | None = None,
    authenticator: Authenticator | None = None,
) -> FastAPI:
    """Build the ticket sub-application, constructing only the bindings not supplied."""
    config = config or {}
    if storage is None:
        storage = build_storage(config)
    if authenticator is None:
        authenticator = build_authenticator(config)

    app = FastAPI(title="Tickets")
    app.state.storage = storage
    app.state.authenticator = authenticator
    install_exception_handlers(app)
    app.include_router(ticket_router)
    return app


def register(
    host: FastAPI,
    config: Mapping[str, Any] | None = None,
    *,
    prefix: str | None = None,
) -> FastAPI:
    """Mount the ticket routes on ``host``, reusing any binding the host already exposes."""
    config = config or {}

    # nothing is published on host.state until every missing binding is built
    storage = getattr(host.state, "storage", None)
    authenticator = getattr(host.state, "authenticator", None)
    built = {}
    if authenticator is None:
        authenticator = built["authenticator"] = build_authenticator(config)
    else:
        logger.info("reusing host auth binding")
    if storage is None:
        storage = built["storage"] = build_storage(config)
    else:
        logger.info("reusing host storage binding")

    tickets = compose(config, storage=storage, authenticator=authenticator)
    for name, binding in built.items():
        setattr(host.state, name, binding)

    mount_at = (prefix or config.get("prefix") or DEFAULT_PREFIX).rstrip("/")
    host.router.routes.append(PrefixMount(mount_at, app=tickets))
    logger.info("ticket routes mounted", extra={"prefix": mount_at})
    return tickets


__all__ = ["compose", "register", "build_storage", "build_authenticator", "DEFAULT_PREFIX"]
