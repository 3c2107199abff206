# storefront/accounts.py
import logging
from typing import Dict

from .errors import AlreadyExists, InvalidCredentials

logger = logging.getLogger(__name__)


class AccountStore:
    # Passwords are kept verbatim: demo credential store, not for production.

    def __init__(self):
        self._users: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._users)

    def exists(self, username: str) -> bool:
        return username in self._users

    def register(self, username: str, password: str) -> None:
        if username in self._users:
            raise AlreadyExists("Username already exists.")
        self._users[username] = password
        logger.info("registered account %s", username)

    def authenticate(self, username: str, password: str) -> None:
        # unknown user and wrong password fail the same way
        if username not in self._users or self._users[username] != password:
            raise InvalidCredentials()
