# storefront/errors.py
from typing import List, Dict, Any


class StoreError(Exception):
    """Base class for every recoverable storefront error.

    `status_code` is what the HTTP layer answers with.
    """
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message}


class ValidationError(StoreError):
    status_code = 400


class NotFound(StoreError):
    status_code = 404


class AlreadyExists(StoreError):
    status_code = 409


class InvalidCredentials(StoreError):
    status_code = 401

    def __init__(self, message: str = "Invalid credentials."):
        super().__init__(message)


class NotAuthenticated(StoreError):
    status_code = 401

    def __init__(self, message: str = "Not logged in."):
        super().__init__(message)


class AccessDenied(StoreError):
    status_code = 403


class InsufficientStock(StoreError):
    """Checkout found one or more lines asking for more than is in stock.

    `shortages` holds one dict per offending line:
    {"product_id", "name", "requested", "available"}.
    """
    status_code = 409

    def __init__(self, shortages: List[Dict[str, Any]]):
        self.shortages = shortages
        self.messages = [
            f"Not enough stock for {s['name']}. Available: {s['available']}"
            for s in shortages
        ]
        super().__init__("\n".join(self.messages))

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "shortages": self.shortages}
