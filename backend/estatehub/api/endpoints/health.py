from fastapi import APIRouter, Depends

from estatehub import __version__
from estatehub.api.deps import get_services
from estatehub.core.logging import get_logger
from estatehub.services import MarketplaceServices

logger = get_logger(__name__)
router = APIRouter()


@router.get("/")
async def health_check():
    """Basic health check endpoint."""
    logger.info("Health check requested")
    return {"status": "healthy", "service": "EstateHub Marketplace"}


@router.get("/detailed")
async def detailed_health_check(services: MarketplaceServices = Depends(get_services)):
    """Detailed health check with store and notification information."""
    logger.info("Detailed health check requested")

    return {
        "status": "healthy",
        "service": "EstateHub Marketplace",
        "version": __version__,
        "components": {
            "store": services.store.counts(),
            "email": type(services.email_client).__name__,
            "pending_notifications": services.notifier.pending,
            "dispatch_mode": services.notifier.mode.value,
        }
    }
