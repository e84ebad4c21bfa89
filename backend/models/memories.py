# FILE: backend/models/memories.py
"""
Memory models

Memories are free-form records of scalar values; extra keys sent by clients
are kept.
"""
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict

__all__ = ["Scalar", "MemoryCreate", "MemoryUpdate"]

Scalar = Union[str, int, float, bool]


class MemoryCreate(BaseModel):
    """Create a memory (id optional, assigned by the server when missing)"""
    model_config = ConfigDict(extra="allow")
    
    id: Optional[Union[str, int]] = None
    name: Optional[Scalar] = None
    caption: Optional[Scalar] = None
    details: Optional[Scalar] = None
    imageUrl: Optional[Scalar] = None


class MemoryUpdate(BaseModel):
    """Partial update; only fields present in the request are merged"""
    model_config = ConfigDict(extra="allow")
    
    name: Optional[Scalar] = None
    caption: Optional[Scalar] = None
    details: Optional[Scalar] = None
    imageUrl: Optional[Scalar] = None
