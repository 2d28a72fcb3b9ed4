"""
API Routes Configuration
"""

from fastapi import APIRouter

from callpulse.api.endpoints import diagnostics, health, interactions

# Create main router
router = APIRouter()

# Include endpoint routers
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(interactions.router, prefix="/interactions", tags=["interactions"])
router.include_router(diagnostics.router, prefix="/diagnostics", tags=["diagnostics"])
