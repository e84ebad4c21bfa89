# FILE: backend/services/record_store.py
"""
JSON record store (one document per named resource)

- read() fails soft: missing, empty, corrupt or wrongly-shaped documents
  return a fresh copy of the caller's fallback.
- write() rewrites the whole document through a temp file + os.replace and
  reports failure as False instead of raising.
- update() runs read -> mutate -> write under a per-resource lock.

Concurrency contract: locks are process-local. Two update() calls on the
same resource inside one process never lose each other's changes. Separate
processes writing the same file are last-write-wins, and a bare read()
followed by write() is not serialized against anything.
"""
import copy
import json
import logging
import os
import re
import tempfile
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from backend.errors import StorageWriteError

logger = logging.getLogger(__name__)

_RESOURCE_RE = re.compile(r"^[A-Za-z0-9_-]+$")

# One lock per resolved file path, shared by every RecordStore instance
_locks: Dict[str, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    key = str(path.resolve())
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = threading.RLock()
            _locks[key] = lock
        return lock


class RecordStore:
    """Read/modify/write access to JSON documents under a data directory"""

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, resource: str) -> Path:
        """Resolve resource name to its backing file"""
        if not resource or not _RESOURCE_RE.match(resource):
            raise ValueError(f"Invalid resource name: {resource!r}")
        return self.data_dir / f"{resource}.json"

    def exists(self, resource: str) -> bool:
        return self.path_for(resource).exists()

    def read(self, resource: str, fallback: Any = None) -> Any:
        """Read a resource, returning a copy of fallback on any problem"""
        if fallback is None:
            fallback = []
        path = self.path_for(resource)

        if not path.exists():
            return copy.deepcopy(fallback)

        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = f.read().strip()
        except OSError as e:
            logger.warning(f"Failed to read {path.name}: {e}")
            return copy.deepcopy(fallback)

        if not raw:
            return copy.deepcopy(fallback)

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Failed to parse {path.name}: {e}")
            return copy.deepcopy(fallback)

        if not isinstance(data, type(fallback)):
            logger.warning(
                f"Unexpected document type in {path.name}: "
                f"{type(data).__name__} (expected {type(fallback).__name__})"
            )
            return copy.deepcopy(fallback)

        return data

    def write(self, resource: str, data: Any) -> bool:
        """Overwrite a resource with data. Returns False if nothing was persisted."""
        path = self.path_for(resource)
        tmp_path: Optional[str] = None
        try:
            payload = json.dumps(data, indent=2, ensure_ascii=False)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{resource}.", suffix=".tmp", dir=str(self.data_dir)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, path)
            tmp_path = None
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write JSON to {path.name}: {e}")
            return False
        finally:
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)

        logger.debug(f"Wrote {path.name}")
        return True

    def update(self, resource: str, fallback: Any, mutate: Callable[[Any], Any]) -> Any:
        """
        Read a resource, let mutate() change it in place, then write it back.

        Returns whatever mutate() returns. Raises StorageWriteError when the
        write fails; exceptions from mutate() propagate and nothing is written.
        """
        with _lock_for(self.path_for(resource)):
            data = self.read(resource, fallback)
            result = mutate(data)
            if not self.write(resource, data):
                raise StorageWriteError()
            return result

    def lock(self, resource: str) -> threading.RLock:
        """Lock guarding update() cycles for resource (re-entrant)"""
        return _lock_for(self.path_for(resource))
