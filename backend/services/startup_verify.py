# FILE: backend/services/startup_verify.py
"""
Startup verification
"""
import logging
import tempfile
from pathlib import Path
from typing import Dict, Any

from backend.config import get_settings
from backend.services.auth import PASSWORD_RESOURCE
from backend.services.record_store import RecordStore

logger = logging.getLogger(__name__)


def verify_startup() -> Dict[str, Any]:
    """Verify storage is usable and report whether a password is configured"""
    settings = get_settings()
    logger.info("Running startup verification")
    
    data_dir = Path(settings.data_dir)
    data_writable = True
    try:
        with tempfile.TemporaryFile(dir=str(data_dir)):
            pass
    except OSError as e:
        logger.error(f"Data directory {data_dir} is not writable: {e}")
        data_writable = False
    
    stored = RecordStore(settings.data_dir).read(PASSWORD_RESOURCE, {})
    password_configured = bool(
        stored.get("password_hash") or stored.get("password") or settings.memories_password
    )
    if not password_configured:
        logger.warning("No memories password configured; /check-password will deny every attempt")
    
    frontend_present = Path(settings.frontend_dir).is_dir()
    if not frontend_present:
        logger.info(f"Front end directory {settings.frontend_dir} not found; static bundle disabled")
    
    return {
        "data_writable": data_writable,
        "password_configured": password_configured,
        "frontend_present": frontend_present
    }
