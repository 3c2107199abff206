"""In-memory storefront: catalog, accounts, carts and checkout."""

from .errors import (
    StoreError, ValidationError, NotFound, AlreadyExists,
    InvalidCredentials, InsufficientStock, NotAuthenticated, AccessDenied,
)
from .catalog import Catalog
from .accounts import AccountStore
from .cart import Cart
from .orders import OrderProcessor
from .session import SessionController, Session, SessionState
from .service import Storefront

__all__ = [
    "StoreError", "ValidationError", "NotFound", "AlreadyExists",
    "InvalidCredentials", "InsufficientStock", "NotAuthenticated", "AccessDenied",
    "Catalog", "AccountStore", "Cart", "OrderProcessor",
    "SessionController", "Session", "SessionState", "Storefront",
]
