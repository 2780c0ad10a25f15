"""
Main application entry point
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from estatehub import __version__
from estatehub.api.routes import router as api_router
from estatehub.clients.email import EmailClient
from estatehub.core.config import Settings, get_settings
from estatehub.core.exceptions import register_exception_handlers
from estatehub.core.logging import get_logger, setup_logging
from estatehub.db.init_db import init_db
from estatehub.db.store import MarketplaceStore
from estatehub.services import build_services

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[MarketplaceStore] = None,
    email_client: Optional[EmailClient] = None,
) -> FastAPI:
    """Build an application instance owning its own store and services"""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="REST API for properties, buyers, sellers and offers",
        version=__version__,
    )

    cors_origins = settings.get_cors_origins()
    logger.info("Configuring CORS", allowed_origins=cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.services = build_services(settings, store=store, email_client=email_client)

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.on_event("startup")
    async def startup_event():
        """Load demo data on startup"""
        logger.info("Starting application", environment=settings.ENVIRONMENT)
        if settings.SEED_DEMO_DATA:
            init_db(app.state.services.store)

    @app.on_event("shutdown")
    async def shutdown_event():
        """Flush queued notifications and close the email client"""
        await app.state.services.aclose()
        logger.info("Application stopped")

    @app.get("/")
    async def root():
        return {"message": "EstateHub Marketplace API"}

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


# Set up logging
setup_logging()
app = create_app()
