# FILE: backend/services/audit.py
"""
Audit trail for password checks

One JSONL file per UTC day under <LOGS_DIR>/auth. Entries record the
outcome only; the submitted password is never written.
"""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from backend.config import get_settings

logger = logging.getLogger(__name__)


def log_auth_attempt(
    success: bool,
    client: Optional[str] = None,
    token_prefix: Optional[str] = None
) -> None:
    """Append an authentication attempt to the audit trail (best-effort)"""
    settings = get_settings()
    if not settings.audit_enabled:
        return
    
    now = datetime.now(timezone.utc)
    audit_dir = Path(settings.logs_dir) / "auth"
    audit_file = audit_dir / f"{now.strftime('%Y-%m-%d')}.jsonl"
    
    entry = {
        "timestamp": now.isoformat(),
        "event": "auth_success" if success else "auth_failure",
        "client": client,
        "token_prefix": token_prefix
    }
    
    try:
        audit_dir.mkdir(parents=True, exist_ok=True)
        with open(audit_file, 'a', encoding='utf-8') as f:
            f.write(json.dumps(entry) + '\n')
    except OSError as e:
        # Never fail a login on audit failure
        logger.warning(f"Failed to write auth audit entry to {audit_file.name}: {e}")
