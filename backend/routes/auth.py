# FILE: backend/routes/auth.py
"""
Password check endpoint
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request

from backend.dependencies import get_authenticator
from backend.models.auth import PasswordCheckRequest, PasswordCheckResponse
from backend.services.auth import Authenticator

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/check-password", response_model=PasswordCheckResponse, response_model_exclude_none=True)
async def check_password(
    request: Request,
    body: Optional[PasswordCheckRequest] = None,
    authenticator: Authenticator = Depends(get_authenticator)
):
    """
    Exchange the shared password for a session token.
    A wrong password returns ok=false with no reason and no token.
    """
    candidate = body.password if body else None
    client = request.client.host if request.client else None
    
    token = authenticator.authenticate(candidate, client=client)
    if token is None:
        return {"ok": False}
    
    return {"ok": True, "token": token}
