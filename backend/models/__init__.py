# FILE: backend/models/__init__.py
"""
Pydantic models for request/response validation
"""
from backend.models.auth import *
from backend.models.memories import *
