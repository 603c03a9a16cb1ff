"""
wishlink/models/wish.py

Purpose: Wish record model

- Occasion, message, photos and optional gift card
- Internal id plus public short code
- Cached month/day for same-day matching
- Delivery lifecycle of the occasion-day SMS
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from utils.constants import OCCASION_OTHER


class DeliveryStatus(str, Enum):
    """
    Delivery lifecycle of the occasion-day SMS.

    PENDING -> ATTEMPT_SENT -> CONFIRMED | FAILED
    """

    PENDING = "pending"
    ATTEMPT_SENT = "attempt_sent"
    CONFIRMED = "confirmed"
    FAILED = "failed"


DELIVERY_TRANSITIONS = {
    DeliveryStatus.PENDING: [DeliveryStatus.ATTEMPT_SENT],
    DeliveryStatus.ATTEMPT_SENT: [DeliveryStatus.CONFIRMED, DeliveryStatus.FAILED],
    DeliveryStatus.CONFIRMED: [],
    DeliveryStatus.FAILED: [],
}


def is_valid_delivery_transition(from_status: DeliveryStatus, to_status: DeliveryStatus) -> bool:
    """Checks if a delivery status change is allowed."""
    return to_status in DELIVERY_TRANSITIONS.get(from_status, [])


# Keys written by the first WishLink release (camelCase, browser storage)
STORED_WISH_KEYS = {
    "wishNumber": "code",
    "senderName": "sender_name",
    "senderPhone": "sender_phone",
    "recipientName": "recipient_name",
    "recipientPhone": "recipient_phone",
    "customOccasion": "custom_occasion",
    "occasionDate": "occasion_date",
    "occasionMonth": "occasion_month",
    "occasionDay": "occasion_day",
    "createdAt": "created_at",
    "smsSent": "notified",
    "giftCard": "gift_card",
}
STORED_GIFT_CARD_KEYS = {"brandLogo": "brand_logo"}


class GiftCard(BaseModel):
    """E-gift card attached to a wish."""

    brand: str
    brand_logo: str = ""
    amount: float
    currency: str = "$"
    code: str
    message: str = ""

    @model_validator(mode="before")
    @classmethod
    def accept_stored_keys(cls, data):
        if isinstance(data, dict):
            return {STORED_GIFT_CARD_KEYS.get(k, k): v for k, v in data.items()}
        return data


class WishForm(BaseModel):
    """
    Caller-supplied wish content.
    Size limits belong to the calling form, not to this model.
    """

    sender_name: str
    sender_phone: str
    recipient_name: str
    recipient_phone: str
    occasion: str
    custom_occasion: str = ""
    message: str
    photos: List[str] = Field(default_factory=list)
    occasion_date: date
    gift_card: Optional[GiftCard] = None

    @property
    def resolved_occasion(self) -> str:
        """The occasion stored on the wish ("other" takes the custom label)."""
        if self.occasion == OCCASION_OTHER:
            return self.custom_occasion
        return self.occasion


class Wish(BaseModel):
    """
    A stored greeting.

    id, code and created_at never change after creation.
    """

    id: str
    code: str
    sender_name: str
    sender_phone: str
    recipient_name: str
    recipient_phone: str
    occasion: str
    message: str
    photos: List[str] = Field(default_factory=list)
    occasion_date: date
    occasion_month: int
    occasion_day: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    notified: bool = False
    notified_at: Optional[datetime] = None
    delivery_status: DeliveryStatus = DeliveryStatus.PENDING
    gift_card: Optional[GiftCard] = None

    @model_validator(mode="before")
    @classmethod
    def accept_stored_keys(cls, data):
        """
        Reads records in the first release's camelCase layout.
        They are written back in the current layout on the next save.
        """
        if not isinstance(data, dict) or not any(key in STORED_WISH_KEYS for key in data):
            return data

        data = {STORED_WISH_KEYS.get(k, k): v for k, v in data.items()}

        custom = data.pop("custom_occasion", "")
        if data.get("occasion") == OCCASION_OTHER and custom:
            data["occasion"] = custom

        occasion_date = data.get("occasion_date")
        if isinstance(occasion_date, str) and "T" in occasion_date:
            data["occasion_date"] = occasion_date.split("T", 1)[0]

        if data.get("notified") and "delivery_status" not in data:
            data["delivery_status"] = DeliveryStatus.ATTEMPT_SENT
        return data

    class Config:
        json_schema_extra = {
            "example": {
                "id": "4f9d2c1e-8a61-4d3c-9a57-0f3c2b1e6d42",
                "code": "K7M2QX",
                "sender_name": "Asha",
                "sender_phone": "5551234567",
                "recipient_name": "Ravi",
                "recipient_phone": "5559876543",
                "occasion": "birthday",
                "message": "Happy birthday, have a great year!",
                "photos": [],
                "occasion_date": "2026-10-19",
                "occasion_month": 10,
                "occasion_day": 19,
                "created_at": "2026-10-01T10:00:00+00:00",
                "notified": False,
                "delivery_status": "pending",
            }
        }
