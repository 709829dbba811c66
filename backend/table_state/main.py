"""
Table State - FastAPI Application
Main entry point for the table state API
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from table_state.core.config import Settings, configure_logging, settings as default_settings
from table_state.api import tables

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_TITLE,
        description="Tabellen-Zustand (Suche, Sortierung, Filter, Spalten, Seite) als Query-String",
        version=settings.APP_VERSION,
    )

    # CORS Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(tables.router, prefix="/api/tables", tags=["Tables"])

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": settings.APP_TITLE,
            "version": settings.APP_VERSION,
            "docs": "/docs",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    logger.info(f"✅ {settings.APP_TITLE} {settings.APP_VERSION} gestartet")
    return app


app = create_app()
