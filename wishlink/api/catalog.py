"""
wishlink/api/catalog.py

Purpose: Static catalog endpoints

- Occasion list
- Gift card brands and preset amounts
- Gift card builder
"""

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from wishlink.core.exceptions import ValidationError
from wishlink.models.wish import GiftCard
from wishlink.services.gift_card_service import build_gift_card, get_brand
from utils.constants import GIFT_AMOUNTS, GIFT_CARD_BRANDS, MAX_GIFT_MESSAGE_LENGTH, OCCASIONS

router = APIRouter(prefix="/catalog")


class GiftCardBuildRequest(BaseModel):
    brand: str
    amount: float = Field(..., gt=0)
    message: Optional[str] = Field(default=None, max_length=MAX_GIFT_MESSAGE_LENGTH)


@router.get("/occasions")
async def list_occasions():
    return OCCASIONS


@router.get("/gift-cards")
async def list_gift_cards():
    return {"brands": GIFT_CARD_BRANDS, "amounts": GIFT_AMOUNTS}


@router.post("/gift-cards", response_model=GiftCard, status_code=201)
async def create_gift_card(body: GiftCardBuildRequest):
    if get_brand(body.brand) is None:
        raise ValidationError(f"Unknown gift card brand: {body.brand}")
    return build_gift_card(body.brand, body.amount, body.message)
