"""
API Routes Configuration
"""

from fastapi import APIRouter

from estatehub.api.endpoints import buyers, health, offers, properties, sellers

# Create main router
router = APIRouter()

# Include endpoint routers
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(properties.router, prefix="/properties", tags=["properties"])
router.include_router(offers.router, prefix="/offers", tags=["offers"])
router.include_router(buyers.router, prefix="/buyers", tags=["buyers"])
router.include_router(sellers.router, prefix="/sellers", tags=["sellers"])
