# FILE: backend/services/dates_service.py
"""
Shared calendar dates (a single mapping in the "dates" resource)
"""
import logging
from typing import Any, Dict

from backend.services.record_store import RecordStore

logger = logging.getLogger(__name__)

DATES_RESOURCE = "dates"


class DatesService:
    """Read and merge shared dates"""
    
    def __init__(self, record_store: RecordStore):
        self.record_store = record_store
    
    def get(self) -> Dict[str, Any]:
        return self.record_store.read(DATES_RESOURCE, {})
    
    def merge(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Shallow-merge values onto the stored dates and return the result"""
        def _merge(dates: Dict[str, Any]) -> Dict[str, Any]:
            dates.update(values)
            return dict(dates)
        
        merged = self.record_store.update(DATES_RESOURCE, {}, _merge)
        logger.info(f"Dates stored: keys={sorted(values)}")
        return merged
