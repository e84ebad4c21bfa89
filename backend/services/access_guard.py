# FILE: backend/services/access_guard.py
"""
Access guard for the memories routes

Tokens travel as "Authorization: Bearer <token>" or, as a fallback, the raw
token in "X-Mem-Token". The guard holds no state of its own; every check
reads the current session store.
"""
import logging
from typing import Mapping, Optional

from backend.services.session_store import SessionStore

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
TOKEN_HEADER = "x-mem-token"


def extract_token(headers: Mapping[str, str]) -> Optional[str]:
    """Pull the session token out of request headers"""
    lowered = {k.lower(): v for k, v in headers.items()}
    value = lowered.get("authorization") or lowered.get(TOKEN_HEADER)
    if not value:
        return None
    if value.startswith(BEARER_PREFIX):
        value = value[len(BEARER_PREFIX):]
    value = value.strip()
    return value or None


class AccessGuard:
    """Allows a request iff it carries a token for a live session"""

    def __init__(self, session_store: SessionStore):
        self.session_store = session_store

    def authorize(self, headers: Mapping[str, str]) -> bool:
        token = extract_token(headers)
        if token is None:
            logger.debug("Denied: no token")
            return False
        if self.session_store.find_valid(token) is None:
            logger.debug("Denied: unknown or expired token")
            return False
        return True
