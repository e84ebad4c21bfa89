# FILE: backend/services/session_store.py
"""
Session store backed by the "sessions" record set

Each entry is {"token": str, "expires": epoch millis}. A session is valid
while expires is absent/null or strictly greater than now. Sessions are
never revoked; expired entries are dropped when the set is rewritten if
pruning is enabled.
"""
import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional

from backend.services.record_store import RecordStore

logger = logging.getLogger(__name__)

SESSIONS_RESOURCE = "sessions"


def now_ms() -> int:
    """Current time in epoch milliseconds"""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Session:
    token: str
    expires: Optional[int] = None

    def to_record(self) -> Dict[str, Any]:
        return asdict(self)


def is_session_valid(entry: Dict[str, Any], now: int) -> bool:
    """Valid iff expires is missing/null or in the future"""
    expires = entry.get("expires")
    if expires is None:
        return True
    try:
        return float(expires) > now
    except (TypeError, ValueError):
        return False


class SessionStore:
    """Active authentication tokens"""

    def __init__(
        self,
        record_store: RecordStore,
        prune_expired: bool = True,
        clock: Callable[[], int] = now_ms
    ):
        self.record_store = record_store
        self.prune_expired = prune_expired
        self.clock = clock

    def all(self) -> List[Dict[str, Any]]:
        """All stored sessions, including expired ones"""
        sessions = self.record_store.read(SESSIONS_RESOURCE, [])
        return [s for s in sessions if isinstance(s, dict)]

    def add(self, session: Session) -> None:
        """Append a session, pruning expired entries on the way if enabled"""
        def _append(sessions: List[Any]) -> None:
            if self.prune_expired:
                now = self.clock()
                kept = [
                    s for s in sessions
                    if isinstance(s, dict) and is_session_valid(s, now)
                ]
                pruned = len(sessions) - len(kept)
                if pruned:
                    logger.debug(f"Pruned {pruned} expired sessions")
                sessions[:] = kept
            sessions.append(session.to_record())

        self.record_store.update(SESSIONS_RESOURCE, [], _append)

    def find_valid(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Return the stored session for token if it exists and has not expired.

        Linear scan over every session, O(n) per call.
        """
        if not token:
            return None
        now = self.clock()
        for entry in self.all():
            if entry.get("token") == token and is_session_valid(entry, now):
                return entry
        return None

    def index(self) -> Dict[str, Dict[str, Any]]:
        """Token -> session map of currently valid sessions"""
        now = self.clock()
        return {
            s["token"]: s for s in self.all()
            if isinstance(s.get("token"), str) and is_session_valid(s, now)
        }
