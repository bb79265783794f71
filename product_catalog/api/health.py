"""
==============================================================================
Health Check Endpoints
==============================================================================

Liveness endpoint probed by the gateway before every forwarded call.

==============================================================================
"""

from fastapi import APIRouter


router = APIRouter(tags=["Health"])


@router.get("/health-check")
async def health_check():
    """Cheap liveness probe; touches nothing but the process itself."""
    return {"status": "ok"}
