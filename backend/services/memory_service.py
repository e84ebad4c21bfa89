# FILE: backend/services/memory_service.py
"""
Memory collection (captioned images) on top of the "memories" record set

Records are free-form mappings; the service only relies on "id" and reads
name/caption/details/imageUrl defensively. Updates are a shallow merge and
never change a record's id.
"""
import logging
import time
import uuid
from typing import Any, Dict, List, Optional, Tuple

from backend.errors import NotFoundError
from backend.services.record_store import RecordStore
from backend.services.upload_intake import StoredUpload, UploadIntake

logger = logging.getLogger(__name__)

MEMORIES_RESOURCE = "memories"


def generate_memory_id() -> str:
    """Timestamp-derived id with a random suffix, e.g. '1718000000000-3f9a1c2e'"""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


def _find_index(memories: List[Any], memory_id: str) -> int:
    for idx, memory in enumerate(memories):
        if isinstance(memory, dict) and str(memory.get("id", "")) == memory_id:
            return idx
    return -1


class MemoryService:
    """CRUD over memories"""

    def __init__(self, record_store: RecordStore, upload_intake: UploadIntake):
        self.record_store = record_store
        self.upload_intake = upload_intake

    def list(self) -> List[Dict[str, Any]]:
        return self.record_store.read(MEMORIES_RESOURCE, [])

    def create(self, fields: Dict[str, Any]) -> Tuple[int, str]:
        """Append a memory; returns (new count, id)"""
        memory_id = fields.get("id")
        memory_id = str(memory_id) if memory_id not in (None, "") else generate_memory_id()
        record = dict(fields, id=memory_id)

        def _append(memories: List[Any]) -> int:
            memories.append(record)
            return len(memories)

        count = self.record_store.update(MEMORIES_RESOURCE, [], _append)
        logger.info(f"Memory added: id={memory_id} count={count}")
        return count, memory_id

    def create_from_upload(
        self,
        upload: StoredUpload,
        caption: Optional[str] = None,
        name: Optional[str] = None,
        details: Optional[str] = None
    ) -> Dict[str, Any]:
        """Append a memory whose image was just stored by the upload intake"""
        memory = {
            "id": generate_memory_id(),
            "name": name or "Anonymous",
            "caption": caption or upload.original_name,
            "details": details or "",
            "imageUrl": upload.url
        }
        self.record_store.update(MEMORIES_RESOURCE, [], lambda memories: memories.append(memory))
        logger.info(f"Memory uploaded: id={memory['id']} file={upload.stored_filename}")
        return memory

    def update(self, memory_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Shallow-merge fields onto the memory with this id"""
        memory_id = str(memory_id)
        changes = {k: v for k, v in fields.items() if k != "id"}

        with self.record_store.lock(MEMORIES_RESOURCE):
            if not self.record_store.exists(MEMORIES_RESOURCE):
                raise NotFoundError("No memories store")

            def _merge(memories: List[Any]) -> Dict[str, Any]:
                idx = _find_index(memories, memory_id)
                if idx == -1:
                    raise NotFoundError("Memory not found")
                updated = dict(memories[idx], **changes)
                memories[idx] = updated
                return updated

            updated = self.record_store.update(MEMORIES_RESOURCE, [], _merge)

        logger.info(f"Memory updated: id={memory_id} fields={sorted(changes)}")
        return updated

    def delete(self, memory_id: str) -> Dict[str, Any]:
        """Remove a memory, then best-effort remove its uploaded image"""
        memory_id = str(memory_id)

        with self.record_store.lock(MEMORIES_RESOURCE):
            if not self.record_store.exists(MEMORIES_RESOURCE):
                raise NotFoundError("No memories store")

            def _remove(memories: List[Any]) -> Dict[str, Any]:
                idx = _find_index(memories, memory_id)
                if idx == -1:
                    raise NotFoundError("Memory not found")
                return memories.pop(idx)

            removed = self.record_store.update(MEMORIES_RESOURCE, [], _remove)

        image_url = str(removed.get("imageUrl") or "")
        if self.upload_intake.owns_url(image_url):
            self.upload_intake.delete(image_url.rsplit("/", 1)[-1])

        logger.info(f"Memory deleted: id={memory_id}")
        return removed
