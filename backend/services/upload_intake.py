# FILE: backend/services/upload_intake.py
"""
Upload intake for images and songs

Stored name is "<epoch millis>_<sanitized original name>", which keeps
concurrent uploads apart in practice but does not guarantee it.
"""
import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from backend.errors import BadRequestError, PayloadTooLargeError, StorageWriteError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9.\-_]")

# kind -> required MIME type prefix
MIME_PREFIXES = {
    "image": "image/",
    "audio": "audio/",
}


@dataclass(frozen=True)
class StoredUpload:
    stored_filename: str
    original_name: str
    mime_type: str
    size_bytes: int
    url: str


def sanitize_filename(name: str) -> str:
    """Replace anything outside [A-Za-z0-9._-] with an underscore"""
    safe = _UNSAFE_CHARS.sub("_", Path(name).name)
    return safe or "upload"


class UploadIntake:
    """Persists uploaded files into the managed upload directory"""

    def __init__(self, upload_dir: str, url_prefix: str = "/assets/uploads", max_mb: int = 50):
        self.upload_dir = Path(upload_dir)
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_mb * 1024 * 1024

    def url_for(self, stored_filename: str) -> str:
        return f"{self.url_prefix}/{stored_filename}"

    def owns_url(self, url: str) -> bool:
        """True when url points into the managed upload directory"""
        return bool(url) and url.startswith(self.url_prefix + "/")

    async def save(self, upload: Optional[UploadFile], kind: str) -> StoredUpload:
        """Validate and store an uploaded file of the given kind ("image" or "audio")"""
        if upload is None or not upload.filename:
            raise BadRequestError("No file uploaded")

        mime_type = upload.content_type or ""
        prefix = MIME_PREFIXES.get(kind)
        if prefix is None:
            raise ValueError(f"Unknown upload kind: {kind}")
        if not mime_type.startswith(prefix):
            logger.info(f"Rejected upload {upload.filename!r}: {mime_type or 'no type'} is not {kind}")
            raise BadRequestError(f"Only {kind} files allowed")

        stored_filename = f"{int(time.time() * 1000)}_{sanitize_filename(upload.filename)}"
        target = self.upload_dir / stored_filename

        size = 0
        try:
            with open(target, 'wb') as f:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.max_bytes:
                        raise PayloadTooLargeError()
                    f.write(chunk)
        except PayloadTooLargeError:
            target.unlink(missing_ok=True)
            logger.warning(f"Upload {upload.filename!r} exceeded {self.max_bytes} bytes")
            raise
        except OSError as e:
            target.unlink(missing_ok=True)
            logger.error(f"Failed to store upload {stored_filename}: {e}")
            raise StorageWriteError("Failed to store upload") from e

        logger.info(f"Stored upload {stored_filename} ({size} bytes, {mime_type})")
        return StoredUpload(
            stored_filename=stored_filename,
            original_name=upload.filename,
            mime_type=mime_type,
            size_bytes=size,
            url=self.url_for(stored_filename)
        )

    def delete(self, filename: str) -> bool:
        """
        Best-effort removal of a stored file (basename only).
        Returns True if a file was removed; errors are logged, never raised.
        """
        name = Path(filename or "").name
        if not name:
            return False
        path = self.upload_dir / name
        try:
            if path.is_file():
                path.unlink()
                logger.info(f"Deleted upload {name}")
                return True
        except OSError as e:
            logger.warning(f"Failed to delete upload {name}: {e}")
        return False
