# FILE: backend/middleware/rate_limit.py
"""
Rate limiting middleware (simple in-memory, per client and path)

Only the configured paths are throttled, so a guessing loop against
/check-password is slowed without touching the rest of the app.
"""
import logging
import time
from collections import defaultdict
from typing import Iterable
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding one-minute window limiter"""
    
    def __init__(self, app, rpm: int = 20, paths: Iterable[str] = ("/check-password",)):
        super().__init__(app)
        self.rpm = rpm
        self.paths = set(paths)
        self.requests = defaultdict(list)
    
    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path not in self.paths:
            return await call_next(request)
        
        client_ip = request.client.host if request.client else "unknown"
        key = (client_ip, path)
        now = time.time()
        
        # Clean old entries
        self.requests[key] = [
            ts for ts in self.requests[key]
            if now - ts < WINDOW_SECONDS
        ]
        
        # Check limit
        if len(self.requests[key]) >= self.rpm:
            logger.warning(f"Rate limit exceeded for {client_ip} on {path}")
            return JSONResponse(
                status_code=429,
                content={"error": "Rate limit exceeded"}
            )
        
        # Record request
        self.requests[key].append(now)
        
        return await call_next(request)
