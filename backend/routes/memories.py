# FILE: backend/routes/memories.py
"""
Memories endpoints

Reading, updating, deleting and uploading require a session token.
/add-memory is open.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile

from backend.dependencies import get_memory_service, require_memories_auth
from backend.models.memories import MemoryCreate, MemoryUpdate
from backend.services.memory_service import MemoryService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/add-memory")
async def add_memory(
    request: Optional[MemoryCreate] = None,
    service: MemoryService = Depends(get_memory_service)
):
    """Add a memory (no token required)"""
    count, memory_id = service.create(request.model_dump(exclude_unset=True) if request else {})
    
    return {
        "message": "Memory added",
        "count": count,
        "id": memory_id
    }


@router.get("/memories", dependencies=[Depends(require_memories_auth)])
async def list_memories(service: MemoryService = Depends(get_memory_service)):
    """All memories, unpaginated"""
    return service.list()


@router.put("/memories/{memory_id}", dependencies=[Depends(require_memories_auth)])
async def update_memory(
    memory_id: str,
    request: Optional[MemoryUpdate] = None,
    service: MemoryService = Depends(get_memory_service)
):
    """Merge the supplied fields into an existing memory"""
    memory = service.update(memory_id, request.model_dump(exclude_unset=True) if request else {})
    
    return {
        "message": "Memory updated",
        "memory": memory
    }


@router.delete("/memories/{memory_id}", dependencies=[Depends(require_memories_auth)])
async def delete_memory(
    memory_id: str,
    service: MemoryService = Depends(get_memory_service)
):
    """Delete a memory and its uploaded image"""
    removed = service.delete(memory_id)
    
    return {
        "message": "Memory deleted",
        "removed": removed
    }


@router.post("/upload-memory", dependencies=[Depends(require_memories_auth)])
async def upload_memory(
    file: Optional[UploadFile] = File(None),
    caption: Optional[str] = Form(None),
    title: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    details: Optional[str] = Form(None),
    service: MemoryService = Depends(get_memory_service)
):
    """Store an image and create a memory pointing at it"""
    stored = await service.upload_intake.save(file, kind="image")
    try:
        memory = service.create_from_upload(
            stored,
            caption=caption or title,
            name=name,
            details=details
        )
    except Exception:
        service.upload_intake.delete(stored.stored_filename)
        raise
    
    return {
        "message": "Memory uploaded",
        "mem": memory
    }
