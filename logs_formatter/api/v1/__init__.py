"""API v1 router."""

from fastapi import APIRouter

from logs_formatter.api.v1.endpoints import health, products

router = APIRouter(prefix="/api/v1")
router.include_router(health.router)
router.include_router(products.router)

__all__ = ["router"]
