import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routers import files as files_router
from app.core.config import Settings, get_settings
from app.services.storage import StorageService, build_storage_service

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    storage: StorageService | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "storage", None) is None:
            app.state.storage = build_storage_service(settings)
        logger.info("Presign service started (env=%s)", settings.env)
        yield
        logger.info("Presign service stopped")

    app = FastAPI(
        debug=settings.debug,
        title="Miraio Presign API",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.storage = storage

    app.include_router(files_router.router)

    return app
