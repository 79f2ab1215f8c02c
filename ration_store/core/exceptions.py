# ration_store/core/exceptions.py
from typing import Any, Dict, Optional


class RationStoreError(Exception):
    """Base exception for the ration store API.

    Every subclass maps to one HTTP status; the message is shown to the
    user verbatim by the presentation layer.
    """

    status_code = 500
    default_message = "An error occurred in the ration store"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Body returned to the client"""
        body = {"error": self.message}
        body.update(self.details)
        return body


class ValidationError(RationStoreError):
    """Missing or invalid required fields"""

    status_code = 400
    default_message = "All fields are required"


class NotFoundError(RationStoreError):
    """Unknown family, stock item or id"""

    status_code = 404
    default_message = "Record not found"

    def __init__(self, message: Optional[str] = None, entity: Optional[str] = None):
        super().__init__(message)
        self.entity = entity


class ConflictError(RationStoreError):
    """Duplicate natural key"""

    status_code = 409
    default_message = "Record already exists"


class InsufficientStockError(RationStoreError):
    """Requested quantity exceeds the current stock of an item"""

    status_code = 400

    def __init__(self, available: Any):
        self.available = float(available)
        super().__init__(
            f"Insufficient stock. Available: {self.available:g}",
            details={"available": self.available},
        )


class StoreError(RationStoreError):
    """Underlying persistence failure; the engine's message is never exposed"""

    status_code = 500
    default_message = "Database error"
