"""scripthost - HTTP status surface.

FastAPI application exposing the script host's module registry.
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from loguru import logger

from scripthost import __version__
from scripthost.app.config import settings
from scripthost.app.routers import modules_router
from scripthost.host import ScriptHost


def create_app(host: ScriptHost | None = None, engine: Any = None) -> FastAPI:
    """Build the application.

    Either pass a configured ScriptHost, or an engine handle from which a
    host with only the core module is created.
    """
    if host is None:
        if engine is None:
            raise ValueError("create_app needs a ScriptHost or an engine handle")
        host = ScriptHost(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("=" * 60)
        logger.info(f"  {settings.app_name} v{__version__} - INITIALIZING")
        logger.info("=" * 60)
        host.start()
        yield
        host.stop()
        logger.info(f"{settings.app_name} shutting down...")

    app = FastAPI(
        title=settings.app_name,
        description="Embedded scripting host",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.script_host = host
    app.state.module_registry = host.registry
    app.include_router(modules_router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        registry = host.registry
        return {
            "status": "operational" if registry.is_initialized else "stopped",
            "version": __version__,
            "modules": len(registry),
            "failed": sorted(registry.failed),
        }

    return app
