# FILE: backend/routes/health.py
"""
Health check endpoint
"""
import logging
import time
from fastapi import APIRouter

logger = logging.getLogger(__name__)
router = APIRouter()

_started_at = time.monotonic()


@router.get("/ping")
async def ping():
    """Process uptime in seconds"""
    return {
        "uptime": round(time.monotonic() - _started_at, 3),
        "status": "ok"
    }
