# FILE: backend/services/auth.py
"""
Shared-password authentication

The secret lives in the "password" resource, either as
{"password": "<plaintext>"} or {"password_hash": "$pbkdf2-sha256$..."}.
When neither is present the MEMORIES_PASSWORD setting is used. Comparison
is exact and case-sensitive; plaintext secrets are compared in constant time.
"""
import hmac
import logging
import uuid
from typing import Callable, Optional

from passlib.context import CryptContext

from backend.services.audit import log_auth_attempt
from backend.services.record_store import RecordStore
from backend.services.session_store import Session, SessionStore, now_ms

logger = logging.getLogger(__name__)

PASSWORD_RESOURCE = "password"
MS_PER_DAY = 1000 * 60 * 60 * 24


# Password hashing
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(plain: str) -> str:
    """Hash a password for the password_hash field"""
    return pwd_context.hash(plain)


def verify_password(plain: str, stored_hash: str) -> bool:
    """Check plain against a hash produced by hash_password()"""
    try:
        return pwd_context.verify(plain, stored_hash)
    except (ValueError, TypeError) as e:
        logger.warning(f"Unusable password hash in password store: {e}")
        return False


class Authenticator:
    """Validates the shared password and mints sessions"""

    def __init__(
        self,
        record_store: RecordStore,
        session_store: SessionStore,
        ttl_days: int = 7,
        fallback_password: Optional[str] = None,
        clock: Callable[[], int] = now_ms
    ):
        self.record_store = record_store
        self.session_store = session_store
        self.ttl_ms = ttl_days * MS_PER_DAY
        self.fallback_password = fallback_password
        self.clock = clock

    def _check(self, candidate: str) -> bool:
        stored = self.record_store.read(PASSWORD_RESOURCE, {})

        stored_hash = stored.get("password_hash")
        if isinstance(stored_hash, str) and stored_hash:
            return verify_password(candidate, stored_hash)

        secret = stored.get("password")
        if not isinstance(secret, str) or not secret:
            secret = self.fallback_password or ""
        if not secret:
            logger.warning("No memories password configured; denying access")
            return False

        return hmac.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))

    def authenticate(self, candidate, client: Optional[str] = None) -> Optional[str]:
        """
        Return a new session token when candidate matches the stored secret.

        Returns None on mismatch without touching the session store.
        """
        candidate = "" if candidate is None else str(candidate)

        if not self._check(candidate):
            logger.info("Password check failed")
            log_auth_attempt(False, client=client)
            return None

        token = str(uuid.uuid4())
        expires = self.clock() + self.ttl_ms
        self.session_store.add(Session(token=token, expires=expires))

        logger.info("Password check passed; session issued")
        log_auth_attempt(True, client=client, token_prefix=token[:8])
        return token
