"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import get_settings
from .errors import SettingsError
from .routes import centers, settings
from .services.uploads import PUBLIC_PREFIX
from .storage.database import get_db_manager, shutdown_database


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database for the lifetime of the application."""

    app_settings = get_settings()
    logger.info("Starting SampoornaAangan backend version %s", app_settings.app_version)

    await get_db_manager()
    logger.info("Database initialized at %s", app_settings.database_path)
    yield

    await shutdown_database()
    logger.info("Stopping SampoornaAangan backend")


async def handle_settings_error(request: Request, exc: SettingsError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message, "error": exc.detail},
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app_settings = get_settings()
    configure_logging(app_settings.log_level)
    app = FastAPI(title="SampoornaAangan Administration", version=app_settings.app_version, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(SettingsError, handle_settings_error)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"status": "ok", "message": "SampoornaAangan backend running"}

    app.include_router(centers.router)
    app.include_router(settings.router)

    upload_root = app_settings.upload_root
    upload_root.mkdir(parents=True, exist_ok=True)
    app.mount(PUBLIC_PREFIX, StaticFiles(directory=upload_root), name="uploads")

    return app
