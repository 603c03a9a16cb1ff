"""
wishlink/services/wish_service.py

Purpose: Wish data access and lifecycle

- Create / update / delete wishes
- Lookup by public code (case-insensitive) and by phone role
- Notification bookkeeping (mark notified, delivery results)
- Listing wishes due for today's SMS

Every mutation reads the whole collection, changes it and writes it back.
Missing ids are a silent no-op (or None), never an exception.
"""

import secrets
import uuid
from datetime import date
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from wishlink.core.logging import get_logger, LogContext
from wishlink.db.store import KeyValueStore
from wishlink.models.wish import (
    DeliveryStatus,
    Wish,
    WishForm,
    is_valid_delivery_transition,
)
from utils.constants import WISHES_KEY, WISH_CODE_ALPHABET, WISH_CODE_LENGTH
from utils.time_utils import is_same_month_day, local_today, utc_now
from utils.validation_utils import normalize_code

logger = get_logger(__name__)


def generate_wish_code(length: int = WISH_CODE_LENGTH) -> str:
    """
    Draws a code uniformly from the wish code alphabet.

    Example: "K7M2QX"
    """
    return "".join(secrets.choice(WISH_CODE_ALPHABET) for _ in range(length))


class WishRepository:
    """Ordered collection of wishes, persisted as one blob."""

    def __init__(self, store: KeyValueStore, code_max_attempts: int = 10, tz_name: Optional[str] = None):
        self.store = store
        self.code_max_attempts = max(1, code_max_attempts)
        self.tz_name = tz_name

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _raw(self) -> List[Any]:
        raw = self.store.get(WISHES_KEY, [])
        if not isinstance(raw, list):
            logger.warning("Wishes blob is not a list, treating as empty")
            return []
        return raw

    @staticmethod
    def _parse(record: Any) -> Optional[Wish]:
        try:
            return Wish.model_validate(record)
        except PydanticValidationError:
            return None

    def _load(self) -> List[Wish]:
        wishes = []
        for record in self._raw():
            wish = self._parse(record)
            if wish is None:
                logger.warning("Skipping unreadable wish record")
                continue
            wishes.append(wish)
        return wishes

    def _save(self, wishes: List[Wish]) -> None:
        # Records that do not parse are written back untouched, ahead of the rest
        unreadable = [record for record in self._raw() if self._parse(record) is None]
        self.store.set(WISHES_KEY, unreadable + [wish.model_dump(mode="json") for wish in wishes])

    def _new_code(self, wishes: List[Wish]) -> str:
        taken = {wish.code for wish in wishes}
        code = generate_wish_code()
        attempts = 1
        while code in taken and attempts < self.code_max_attempts:
            code = generate_wish_code()
            attempts += 1

        if code in taken:
            logger.warning(f"No unused wish code after {attempts} draws, keeping duplicate {code}")
        return code

    @staticmethod
    def _content(form: WishForm) -> dict:
        return {
            "sender_name": form.sender_name,
            "sender_phone": form.sender_phone,
            "recipient_name": form.recipient_name,
            "recipient_phone": form.recipient_phone,
            "occasion": form.resolved_occasion,
            "message": form.message,
            "photos": list(form.photos),
            "occasion_date": form.occasion_date,
            "occasion_month": form.occasion_date.month,
            "occasion_day": form.occasion_date.day,
            "gift_card": form.gift_card,
        }

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, form: WishForm) -> Wish:
        """
        Stores a new wish with a fresh id and short code.

        Args:
            form: Wish content

        Returns:
            The stored wish (notified=False)
        """
        wishes = self._load()

        wish = Wish(
            id=str(uuid.uuid4()),
            code=self._new_code(wishes),
            created_at=utc_now(),
            notified=False,
            delivery_status=DeliveryStatus.PENDING,
            **self._content(form),
        )
        wishes.append(wish)
        self._save(wishes)

        with LogContext(wish_id=wish.id, code=wish.code):
            logger.info(f"Wish created for {wish.occasion} on {wish.occasion_date.isoformat()}")

        return wish

    def update(self, wish_id: str, form: WishForm) -> Optional[Wish]:
        """
        Replaces a wish's content, keeping id, code and created_at.
        The SMS is re-armed (notified=False, status pending).

        Returns:
            Updated wish, or None if the id is unknown
        """
        wishes = self._load()

        for index, existing in enumerate(wishes):
            if existing.id != wish_id:
                continue

            updated = Wish(
                id=existing.id,
                code=existing.code,
                created_at=existing.created_at,
                updated_at=utc_now(),
                notified=False,
                delivery_status=DeliveryStatus.PENDING,
                **self._content(form),
            )
            wishes[index] = updated
            self._save(wishes)

            with LogContext(wish_id=wish_id, code=updated.code):
                logger.info("Wish updated")
            return updated

        logger.debug(f"Update skipped, wish {wish_id} not found")
        return None

    def delete(self, wish_id: str) -> None:
        """Removes a wish. Unknown ids are ignored."""
        wishes = self._load()
        remaining = [wish for wish in wishes if wish.id != wish_id]
        if len(remaining) == len(wishes):
            return

        self._save(remaining)
        with LogContext(wish_id=wish_id):
            logger.info("Wish deleted")

    def mark_notified(self, wish_id: str) -> bool:
        """
        Flags a wish's SMS as attempted.

        Returns:
            True if the wish exists
        """
        wishes = self._load()

        for index, wish in enumerate(wishes):
            if wish.id != wish_id:
                continue

            wishes[index] = wish.model_copy(update={
                "notified": True,
                "notified_at": utc_now(),
                "delivery_status": DeliveryStatus.ATTEMPT_SENT,
            })
            self._save(wishes)
            logger.debug(f"Wish {wish_id} marked notified")
            return True

        return False

    def record_delivery_result(self, wish_id: str, delivered: bool) -> Optional[Wish]:
        """
        Completes the delivery lifecycle of an attempted SMS.

        Args:
            wish_id: Wish id
            delivered: True for a confirmed delivery, False for a failure

        Returns:
            Updated wish, or None if unknown or not awaiting confirmation
        """
        target = DeliveryStatus.CONFIRMED if delivered else DeliveryStatus.FAILED
        wishes = self._load()

        with LogContext(wish_id=wish_id, status=target.value):
            for index, wish in enumerate(wishes):
                if wish.id != wish_id:
                    continue

                if not is_valid_delivery_transition(wish.delivery_status, target):
                    logger.warning(f"Ignoring delivery result while {wish.delivery_status.value}")
                    return None

                updated = wish.model_copy(update={"delivery_status": target})
                wishes[index] = updated
                self._save(wishes)
                logger.info("Delivery result recorded")
                return updated

        return None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, wish_id: str) -> Optional[Wish]:
        for wish in self._load():
            if wish.id == wish_id:
                return wish
        return None

    def list_all(self) -> List[Wish]:
        return self._load()

    def find_by_code(self, code: str) -> Optional[Wish]:
        """
        Case-insensitive exact match on the public code.
        The first match in storage order wins.
        """
        wanted = normalize_code(code)
        if not wanted:
            return None

        for wish in self._load():
            if wish.code.upper() == wanted:
                return wish
        return None

    def list_by_sender_phone(self, phone: str) -> List[Wish]:
        return [wish for wish in self._load() if wish.sender_phone == phone]

    def list_by_recipient_phone(self, phone: str) -> List[Wish]:
        return [wish for wish in self._load() if wish.recipient_phone == phone]

    def list_due_for_notification(self, today: Optional[date] = None) -> List[Wish]:
        """
        Wishes whose occasion month/day is today and whose SMS has not gone out.
        The year is ignored, so occasions recur annually.

        Args:
            today: Date to match against (defaults to today in the configured zone)

        Returns:
            Due wishes in storage order
        """
        today = today or local_today(self.tz_name)
        return [
            wish for wish in self._load()
            if not wish.notified and is_same_month_day(wish.occasion_month, wish.occasion_day, today)
        ]
