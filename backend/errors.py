# FILE: backend/errors.py
"""
Error taxonomy surfaced to HTTP clients

Every error carries a short, client-safe message. Handlers in backend.app
render them as {"error": message} with the matching status code.
"""


class AppError(Exception):
    """Base class for errors that map to an HTTP response"""
    
    status_code = 500
    default_message = "Internal server error"
    
    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(AppError):
    status_code = 400
    default_message = "Bad request"


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class PayloadTooLargeError(AppError):
    status_code = 413
    default_message = "File too large"


class StorageWriteError(AppError):
    """A JSON document could not be persisted; the mutation did not take effect"""
    status_code = 500
    default_message = "Storage write failed"
