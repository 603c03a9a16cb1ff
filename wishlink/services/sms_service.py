"""
wishlink/services/sms_service.py

Purpose: SMS delivery (simulated)

- Writes the SMS that would be sent to the log
- Optionally raises a desktop-style notification afterwards
- No network delivery; a real gateway would replace `send`
"""

from typing import Callable, Optional

from wishlink.core.logging import get_logger
from wishlink.models.wish import Wish
from utils.sms_utils import build_sent_notification, mask_phone

logger = get_logger(__name__)

Notifier = Callable[[str, str], None]


def log_notifier(title: str, body: str) -> None:
    """Notifier that writes the notification to the log."""
    logger.info(f"🔔 {title} {body}")


class SimulatedSmsSender:
    """
    Sends SMS by logging them.

    The notifier is best-effort: its failures are logged and never reach
    the caller.
    """

    def __init__(self, notifier: Optional[Notifier] = None):
        self.notifier = notifier

    def send(self, wish: Wish, message: str) -> None:
        """
        Delivers the occasion-day SMS for a wish.

        Args:
            wish: Wish being announced
            message: Prepared SMS text
        """
        logger.info(f"[SMS Simulation] To: {mask_phone(wish.recipient_phone)}")
        logger.info(f"[SMS Simulation] Message: {message}")

        if self.notifier is None:
            return

        title, body = build_sent_notification(wish.recipient_name, wish.occasion)
        try:
            self.notifier(title, body)
        except Exception as e:
            logger.warning(f"Notification failed: {e}", exc_info=True)
