# FILE: backend/dependencies.py
"""
FastAPI dependency providers

Services are built from the current settings on every request. They are
thin wrappers over files on disk, so this costs little and lets tests swap
settings with reload_settings().
"""
from fastapi import Request

from backend.config import get_settings
from backend.errors import UnauthorizedError
from backend.services.access_guard import AccessGuard
from backend.services.auth import Authenticator
from backend.services.dates_service import DatesService
from backend.services.memory_service import MemoryService
from backend.services.playlist_service import PlaylistService
from backend.services.record_store import RecordStore
from backend.services.session_store import SessionStore
from backend.services.upload_intake import UploadIntake


def get_record_store() -> RecordStore:
    return RecordStore(get_settings().data_dir)


def get_session_store() -> SessionStore:
    settings = get_settings()
    return SessionStore(get_record_store(), prune_expired=settings.session_prune_expired)


def get_authenticator() -> Authenticator:
    settings = get_settings()
    return Authenticator(
        get_record_store(),
        get_session_store(),
        ttl_days=settings.session_ttl_days,
        fallback_password=settings.memories_password
    )


def get_upload_intake() -> UploadIntake:
    settings = get_settings()
    return UploadIntake(
        settings.upload_dir,
        url_prefix=settings.upload_url_prefix,
        max_mb=settings.upload_max_mb
    )


def get_memory_service() -> MemoryService:
    return MemoryService(get_record_store(), get_upload_intake())


def get_playlist_service() -> PlaylistService:
    return PlaylistService(get_record_store(), get_upload_intake())


def get_dates_service() -> DatesService:
    return DatesService(get_record_store())


def require_memories_auth(request: Request) -> None:
    """Reject the request with 401 unless it carries a live session token"""
    guard = AccessGuard(get_session_store())
    if not guard.authorize(request.headers):
        raise UnauthorizedError()
