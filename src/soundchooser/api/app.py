"""FastAPI application factory and configuration."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from soundchooser import __version__
from soundchooser.core.switcher import DeviceSwitcher
from soundchooser.settings import ChooserSettings
from soundchooser.utils.logging import get_logger, is_logging_configured, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown."""
    if not is_logging_configured():
        setup_logging()
    logger.info(
        "soundchooser_api_starting",
        script=str(app.state.settings.script_path),
    )
    yield
    app.state.switcher.shutdown(wait=False)
    logger.info("soundchooser_api_stopped")


def create_app(
    enable_ui: bool = True,
    settings: ChooserSettings | None = None,
    switcher: DeviceSwitcher | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        enable_ui: Whether to mount the NiceGUI device menu page.
        settings: Enumeration/switch settings; read from the environment if omitted.
        switcher: Shared switcher; one is built from *settings* if omitted.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or ChooserSettings.from_env()

    app = FastAPI(
        title="soundchooser API",
        description="List audio output sinks and switch the default one",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.switcher = switcher or DeviceSwitcher(command=settings.switch_command)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    from soundchooser.api.routes import devices
    app.include_router(devices.router, prefix="/api")

    if enable_ui:
        try:
            from soundchooser.ui.main import setup_ui
            setup_ui(app)
        except ImportError:
            logger.warning("nicegui_not_available", msg="Web menu disabled")

    return app
