"""
wishlink/services/auth_service.py

Purpose: Phone-number authentication

- Register / login / logout
- Current user lookup through the session
- Password change
- Transparent upgrade of legacy digests on login

Failures are reported as False/None; nothing is raised to the caller and
"unknown phone" is indistinguishable from "wrong password".
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from wishlink.core.logging import get_logger, LogContext
from wishlink.core.security import hash_password, verify_password, needs_rehash
from wishlink.db.store import KeyValueStore
from wishlink.models.user import UserProfile
from wishlink.services.session_service import SessionService
from utils.constants import USERS_KEY
from utils.sms_utils import mask_phone
from utils.time_utils import utc_now

logger = get_logger(__name__)


class AuthDirectory:
    """Mapping of phone -> UserProfile, persisted as one blob."""

    def __init__(
        self,
        store: KeyValueStore,
        sessions: SessionService,
        hash_scheme: str = "pbkdf2",
        hash_iterations: int = 100_000,
    ):
        self.store = store
        self.sessions = sessions
        self.hash_scheme = hash_scheme
        self.hash_iterations = hash_iterations

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _raw(self) -> Dict[str, Any]:
        raw = self.store.get(USERS_KEY, {})
        if not isinstance(raw, dict):
            logger.warning("Users blob is not a mapping, treating as empty")
            return {}
        return raw

    @staticmethod
    def _parse(record: Any) -> Optional[UserProfile]:
        try:
            return UserProfile.model_validate(record)
        except PydanticValidationError:
            return None

    def _load(self) -> Dict[str, UserProfile]:
        users = {}
        for phone, record in self._raw().items():
            user = self._parse(record)
            if user is None:
                logger.warning(f"Skipping unreadable user record for {mask_phone(phone)}")
                continue
            users[phone] = user
        return users

    def _save(self, users: Dict[str, UserProfile]) -> None:
        # Records that do not parse are written back untouched
        records = {
            phone: record
            for phone, record in self._raw().items()
            if phone not in users and self._parse(record) is None
        }
        records.update({phone: user.model_dump(mode="json") for phone, user in users.items()})
        self.store.set(USERS_KEY, records)

    def _digest(self, password: str) -> str:
        return hash_password(password, scheme=self.hash_scheme, iterations=self.hash_iterations)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def is_registered(self, phone: str) -> bool:
        """A phone counts as taken even when its stored record is unreadable."""
        return phone in self._raw()

    def register(self, phone: str, password: str) -> bool:
        """
        Creates a user and starts a session for it.

        Args:
            phone: Phone number (unique key)
            password: Plain text password (strength is the caller's concern)

        Returns:
            False if the phone is already registered
        """
        with LogContext(phone=mask_phone(phone)):
            if self.is_registered(phone):
                logger.info("Registration rejected, phone already registered")
                return False

            users = self._load()
            users[phone] = UserProfile(
                phone=phone,
                password_digest=self._digest(password),
                created_at=utc_now(),
            )
            self._save(users)
            self.sessions.set_current_phone(phone)

            logger.info("User registered")
            return True

    def login(self, phone: str, password: str) -> bool:
        """
        Verifies a password and starts a session.

        Returns:
            False if the phone is unknown or the password does not match
        """
        with LogContext(phone=mask_phone(phone)):
            users = self._load()
            user = users.get(phone)
            if not user or not verify_password(password, user.password_digest):
                logger.info("Login failed")
                return False

            if needs_rehash(user.password_digest, self.hash_scheme):
                users[phone] = user.model_copy(update={"password_digest": self._digest(password)})
                self._save(users)
                logger.info("Upgraded legacy password digest")

            self.sessions.set_current_phone(phone)
            logger.info("User logged in")
            return True

    def logout(self) -> None:
        self.sessions.clear()

    def current_user(self) -> Optional[UserProfile]:
        """
        Resolves the session phone against the directory.

        Returns:
            UserProfile, or None if there is no session or it points nowhere
        """
        phone = self.sessions.get_current_phone()
        if not phone:
            return None
        return self._load().get(phone)

    def change_password(self, phone: str, old_password: str, new_password: str) -> bool:
        """
        Replaces a user's digest after checking the old password.

        Returns:
            False if the phone is unknown or the old password does not match
        """
        with LogContext(phone=mask_phone(phone)):
            users = self._load()
            user = users.get(phone)
            if not user or not verify_password(old_password, user.password_digest):
                logger.info("Password change rejected")
                return False

            users[phone] = user.model_copy(update={"password_digest": self._digest(new_password)})
            self._save(users)

            logger.info("Password changed")
            return True
