"""
==============================================================================
Product Search Service - Application Entry Point
==============================================================================

FastAPI application exposing:
- Full-text product search served through an LRU cache
- Product create and delete kept consistent across store, index and cache
- Health probes

Usage:
------
    # Development
    uvicorn product_search.main:app --reload

    # Production
    uvicorn product_search.main:app --host 0.0.0.0 --port 8080

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from product_search.api.router import api_router
from product_search.catalog.catalog import build_catalog
from product_search.config import get_settings
from product_search.core.exceptions import register_exception_handlers
from product_search.db import get_database_manager, init_db


# ============================================================================
# LOGGING SETUP
# ============================================================================

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class Application:
    """
    FastAPI application factory and manager.

    Handles application lifecycle including:
    - Database initialization and catalog build on startup
    - Worker pool and connection pool release on shutdown
    - Middleware, exception handler and router registration
    """

    def __init__(self):
        self._settings = get_settings()
        self._app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title=self._settings.app_name,
            version="1.0.0",
            description="Cached full-text product search",
            lifespan=self._lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )
        app.state.catalog = None

        self._configure_middleware(app)
        register_exception_handlers(app)
        app.include_router(api_router)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Application lifespan manager."""
        self._startup(app)
        try:
            yield
        finally:
            self._shutdown(app)

    def _startup(self, app: FastAPI) -> None:
        """Connect to the database and build the catalog."""
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {self._settings.app_name}")
        logger.info("=" * 60)

        init_db()

        db_manager = get_database_manager()
        app.state.catalog = build_catalog(db_manager.session_factory, self._settings)

        logger.info(f"✅ {self._settings.app_name} ready")
        logger.info(f"📍 Running on http://{self._settings.host}:{self._settings.port}")
        logger.info(f"📖 API Docs: http://{self._settings.host}:{self._settings.port}/docs")

    def _shutdown(self, app: FastAPI) -> None:
        """Release the catalog worker pool and database connections."""
        logger.info("🛑 Shutting down...")

        catalog = app.state.catalog
        app.state.catalog = None
        if catalog is not None:
            catalog.close()

        get_database_manager().dispose()
        logger.info("✅ Shutdown complete")

    def _configure_middleware(self, app: FastAPI) -> None:
        """Configure application middleware."""
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self._app


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

application = Application()
app = application.app


# ============================================================================
# ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "product_search.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
