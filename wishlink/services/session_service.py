"""
wishlink/services/session_service.py

Purpose: Session management

- Holds at most one "current phone"
- Set by register/login, cleared by logout
- Persisted in the key-value store so it survives restarts
"""

from typing import Optional

from wishlink.db.store import KeyValueStore
from wishlink.core.logging import get_logger
from utils.constants import CURRENT_USER_KEY
from utils.sms_utils import mask_phone

logger = get_logger(__name__)


class SessionService:
    """Process-wide session, owned by the store it is given."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def get_current_phone(self) -> Optional[str]:
        """
        Returns the phone of the logged-in user, or None.
        Anything other than a non-empty string is treated as no session.
        """
        phone = self.store.get(CURRENT_USER_KEY, None)
        if isinstance(phone, str) and phone:
            return phone
        return None

    def set_current_phone(self, phone: str) -> None:
        self.store.set(CURRENT_USER_KEY, phone)
        logger.debug(f"Session started for {mask_phone(phone)}")

    def clear(self) -> None:
        self.store.set(CURRENT_USER_KEY, None)
        logger.debug("Session cleared")
