# FILE: backend/routes/dates.py
"""
Shared dates endpoints
"""
import logging
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends

from backend.dependencies import get_dates_service
from backend.services.dates_service import DatesService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/dates")
async def get_dates(service: DatesService = Depends(get_dates_service)):
    """Stored dates mapping"""
    return service.get()


@router.post("/dates")
async def store_dates(
    values: Dict[str, Any] = Body(default={}),
    service: DatesService = Depends(get_dates_service)
):
    """Merge the posted keys into the stored dates"""
    merged = service.merge(values)
    
    return {
        "message": "Dates stored",
        "dates": merged
    }
