"""
wishlink/schemas/wish.py

Purpose: Wish request/response schemas

- Applies the create-wish form rules (phones, message length, photo count)
- Shapes wish payloads for the API
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from wishlink.models.wish import GiftCard, WishForm
from utils.constants import (
    MAX_GIFT_MESSAGE_LENGTH,
    MAX_MESSAGE_LENGTH,
    MAX_PHOTOS,
    MIN_MESSAGE_LENGTH,
    MIN_PHONE_DIGITS,
    OCCASION_OTHER,
)
from utils.validation_utils import normalize_phone, sanitize_input, validate_phone


class GiftCardInput(GiftCard):
    amount: float = Field(..., gt=0)
    message: str = Field(default="", max_length=MAX_GIFT_MESSAGE_LENGTH)


class WishRequest(WishForm):
    """
    Body of create/update wish calls.
    """

    sender_name: str = Field(..., min_length=1)
    recipient_name: str = Field(..., min_length=1)
    occasion: str = Field(..., min_length=1)
    message: str = Field(..., min_length=MIN_MESSAGE_LENGTH, max_length=MAX_MESSAGE_LENGTH)
    photos: List[str] = Field(default_factory=list, max_length=MAX_PHOTOS)
    gift_card: Optional[GiftCardInput] = None

    @field_validator("sender_phone", "recipient_phone")
    @classmethod
    def validate_phone_digits(cls, v):
        if not validate_phone(v):
            raise ValueError(f"Phone number must have at least {MIN_PHONE_DIGITS} digits")
        return normalize_phone(v)

    @field_validator("sender_name", "recipient_name")
    @classmethod
    def strip_name(cls, v):
        v = sanitize_input(v, max_length=100)
        if not v:
            raise ValueError("Name must not be blank")
        return v

    @field_validator("message")
    @classmethod
    def clean_message(cls, v):
        return sanitize_input(v, max_length=MAX_MESSAGE_LENGTH)

    @model_validator(mode="after")
    def require_custom_occasion(self):
        if self.occasion == OCCASION_OTHER and not self.custom_occasion.strip():
            raise ValueError("custom_occasion is required when occasion is 'other'")
        return self

    def to_form(self) -> WishForm:
        return WishForm.model_validate(self.model_dump())

    class Config:
        json_schema_extra = {
            "example": {
                "sender_name": "Asha",
                "sender_phone": "555-123-4567",
                "recipient_name": "Ravi",
                "recipient_phone": "(555) 987-6543",
                "occasion": "birthday",
                "message": "Happy birthday, have a great year!",
                "photos": [],
                "occasion_date": "2026-10-19",
            }
        }


class DeliveryResultRequest(BaseModel):
    delivered: bool
