"""Main API router — combines all endpoint routers."""

from fastapi import APIRouter

from recordcheck.api.health import router as health_router
from recordcheck.api.validate import router as validate_router

api_router = APIRouter()

# Health check
api_router.include_router(health_router, tags=["Health"])

# Record and tree validation
api_router.include_router(validate_router, tags=["Validation"])
