"""
Health Check Router
==================
Liveness endpoint for the hosting process.
"""
from fastapi import APIRouter

from inkwell import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    """Returns OK if the service is running."""
    return {"status": "ok", "version": __version__}
