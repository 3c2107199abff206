# storefront/session.py
import enum
import logging
import uuid
from typing import Dict, Optional

from .accounts import AccountStore
from .cart import Cart
from .errors import AccessDenied, NotAuthenticated

logger = logging.getLogger(__name__)

ADMIN_USERNAME = "admin"


class SessionState(str, enum.Enum):
    LOGGED_OUT = "logged_out"
    LOGGED_IN = "logged_in"


class Session:
    """Who is logged in for one interaction, and their cart."""

    def __init__(self):
        self.username: Optional[str] = None
        self.cart = Cart()

    @property
    def state(self) -> SessionState:
        return SessionState.LOGGED_IN if self.username else SessionState.LOGGED_OUT

    def login(self, username: str) -> None:
        self.username = username

    def logout(self) -> None:
        self.username = None
        self.cart.clear()


class SessionController:
    """Hands out a token per successful login and resolves tokens to sessions."""

    def __init__(self, admin_username: str = ADMIN_USERNAME):
        self.admin_username = admin_username
        self._sessions: Dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def login(self, accounts: AccountStore, username: str, password: str) -> str:
        accounts.authenticate(username, password)
        session = Session()
        session.login(username)
        token = uuid.uuid4().hex
        self._sessions[token] = session
        logger.info("%s logged in", username)
        return token

    def get(self, token: Optional[str]) -> Session:
        session = self._sessions.get(token) if token else None
        if session is None or session.state is not SessionState.LOGGED_IN:
            raise NotAuthenticated()
        return session

    def logout(self, token: Optional[str]) -> Session:
        session = self.get(token)
        username = session.username
        session.logout()
        del self._sessions[token]
        logger.info("%s logged out", username)
        return session

    def is_admin(self, session: Session) -> bool:
        return session.username == self.admin_username

    def require_admin(self, token: Optional[str]) -> Session:
        session = self.get(token)
        if not self.is_admin(session):
            raise AccessDenied(f"Admin only. Login as '{self.admin_username}' user.")
        return session

    def clear(self) -> None:
        self._sessions.clear()
