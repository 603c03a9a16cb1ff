"""
wishlink/services/notification_service.py

Purpose: Occasion-day SMS poller

- Finds wishes due today that have not been notified
- Sends the SMS and marks the wish notified
- Scheduled passes wait until the configured hour (9 AM by default)
- Runs as an asyncio task while the application is up

There is no retry: a wish is marked notified right after the send attempt,
even if the sender failed. Delivery confirmation arrives separately through
WishRepository.record_delivery_result.
"""

import asyncio
from datetime import datetime
from typing import List, Optional, Protocol

from wishlink.core.logging import get_logger, LogContext
from wishlink.models.wish import Wish
from wishlink.services.wish_service import WishRepository
from utils.sms_utils import build_wish_sms
from utils.time_utils import local_now

logger = get_logger(__name__)


class SmsSender(Protocol):
    def send(self, wish: Wish, message: str) -> None:
        ...


class NotificationPoller:
    """
    Interval-driven SMS poller.

    Args:
        wishes: Wish repository to scan and update
        sender: SMS sender
        interval_seconds: Seconds between scheduled passes
        send_hour: Earliest local hour for scheduled sends
        tz_name: IANA timezone for "now" (server local when None)
    """

    def __init__(
        self,
        wishes: WishRepository,
        sender: SmsSender,
        interval_seconds: int = 60,
        send_hour: int = 9,
        tz_name: Optional[str] = None,
    ):
        self.wishes = wishes
        self.sender = sender
        self.interval_seconds = interval_seconds
        self.send_hour = send_hour
        self.tz_name = tz_name
        self._task: Optional[asyncio.Task] = None

    def _now(self, now: Optional[datetime]) -> datetime:
        return now or local_now(self.tz_name)

    def pending_report(self, now: Optional[datetime] = None) -> List[Wish]:
        """
        Logs and returns the wishes due today without sending anything.
        """
        pending = self.wishes.list_due_for_notification(self._now(now).date())
        for wish in pending:
            logger.info(f"[Scheduler] Pending SMS for {wish.recipient_name} - {wish.occasion}")
        return pending

    def check_and_send(self, now: Optional[datetime] = None, enforce_send_hour: bool = False) -> List[Wish]:
        """
        Runs one notification pass.

        Args:
            now: Current time (defaults to now in the configured zone)
            enforce_send_hour: Skip the pass before `send_hour`

        Returns:
            Wishes for which an SMS was attempted
        """
        now = self._now(now)

        if enforce_send_hour and now.hour < self.send_hour:
            logger.debug(f"Before {self.send_hour}:00, skipping notification pass")
            return []

        sent = []
        for wish in self.wishes.list_due_for_notification(now.date()):
            with LogContext(wish_id=wish.id, code=wish.code):
                message = build_wish_sms(
                    recipient_name=wish.recipient_name,
                    sender_name=wish.sender_name,
                    occasion=wish.occasion,
                    code=wish.code,
                )

                try:
                    self.sender.send(wish, message)
                except Exception as e:
                    logger.error(f"SMS send failed: {e}", exc_info=True)

                self.wishes.mark_notified(wish.id)
                sent.append(wish)

        if sent:
            logger.info(f"📤 Notification pass sent {len(sent)} SMS")
        return sent

    def tick(self, now: Optional[datetime] = None) -> List[Wish]:
        """Scheduled pass, gated on the send hour."""
        return self.check_and_send(now=now, enforce_send_hour=True)

    async def run_forever(self):
        """
        Runs a pass immediately and then every `interval_seconds`.
        Errors in one pass are logged and do not stop the loop.
        """
        logger.info(f"⏰ Notification poller started (every {self.interval_seconds}s)")
        while True:
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Notification pass error: {e}", exc_info=True)

            await asyncio.sleep(self.interval_seconds)

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Starts the loop on the running event loop (idempotent)."""
        if self.is_running:
            logger.warning("Notification poller already running")
            return self._task

        self._task = asyncio.create_task(self.run_forever())
        return self._task

    async def stop(self):
        """Cancels the loop and waits for it to finish."""
        if self._task is None:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        finally:
            self._task = None
            logger.info("Notification poller stopped")
