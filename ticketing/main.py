# ticketing/main.py
# uvicorn ticketing.main:create_app --factory
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ticketing.core.config import Settings, config_from_settings, get_settings
from ticketing.plugin import register


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESC,
        version=settings.APP_VERSION,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    register(app, config_from_settings(settings))

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok"}

    return app
