# FILE: backend/models/auth.py
"""
Password check models
"""
from typing import Optional, Union
from pydantic import BaseModel

__all__ = ["PasswordCheckRequest", "PasswordCheckResponse"]


class PasswordCheckRequest(BaseModel):
    """Submitted shared password"""
    password: Optional[Union[str, int, float]] = None


class PasswordCheckResponse(BaseModel):
    """ok=false carries no token"""
    ok: bool
    token: Optional[str] = None
