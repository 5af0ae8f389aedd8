"""
System API router.

Handles the root endpoint and health checks.
"""

import logging

from fastapi import APIRouter

from api.health import API_VERSION, perform_health_check, perform_liveness_check
from api.middleware import get_request_id

router = APIRouter(tags=["System"])

logger = logging.getLogger(__name__)


@router.get("/")
async def root():
    """
    API root endpoint.

    Returns basic API information and available endpoint categories.
    """
    return {
        "name": "FuelEU Ledger API",
        "version": API_VERSION,
        "status": "operational",
        "docs": "/api/docs",
        "endpoints": {
            "health": "/health",
            "compliance": "/compliance/...",
            "banking": "/banking/...",
            "pools": "/pools/...",
            "routes": "/routes/...",
        },
    }


@router.get("/health")
async def health_check():
    """Service health including database connectivity."""
    result = perform_health_check()
    result["request_id"] = get_request_id()
    return result


@router.get("/health/live")
async def liveness_check():
    """Liveness probe: the process is up."""
    return perform_liveness_check()
