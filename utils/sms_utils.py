"""
utils/sms_utils.py

Purpose: SMS message builders

- Formats the occasion-day SMS sent to a wish recipient
- Formats the desktop notification shown after a send
"""

from typing import Tuple

from utils.constants import (
    WISH_SMS_TEMPLATE,
    NOTIFICATION_TITLE,
    NOTIFICATION_BODY_TEMPLATE,
)


def build_wish_sms(recipient_name: str, sender_name: str, occasion: str, code: str) -> str:
    """
    Builds the SMS telling a recipient that a wish is waiting.

    Args:
        recipient_name: Recipient display name
        sender_name: Sender display name
        occasion: Resolved occasion ("birthday", or a custom label)
        code: Public wish code

    Returns:
        SMS text
    """
    return WISH_SMS_TEMPLATE.format(
        recipient_name=recipient_name,
        sender_name=sender_name,
        occasion=occasion,
        code=code,
    )


def build_sent_notification(recipient_name: str, occasion: str) -> Tuple[str, str]:
    """
    Builds the (title, body) of the notification shown after a send.
    """
    body = NOTIFICATION_BODY_TEMPLATE.format(recipient_name=recipient_name, occasion=occasion)
    return NOTIFICATION_TITLE, body


def mask_phone(phone: str) -> str:
    """
    Masks all but the last four digits of a phone for logs.

    Example: "5559876543" -> "******6543"
    """
    if not phone or len(phone) <= 4:
        return phone or ""
    return "*" * (len(phone) - 4) + phone[-4:]
