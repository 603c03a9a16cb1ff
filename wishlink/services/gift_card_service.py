"""
wishlink/services/gift_card_service.py

Purpose: Gift card catalog and builder

- Brand lookup
- Builds the GiftCard attached to a wish (generated redemption code)
"""

import secrets
from typing import Any, Dict, Optional

from wishlink.models.wish import GiftCard
from utils.constants import (
    GIFT_CARD_BRANDS,
    GIFT_CARD_CODE_ALPHABET,
    GIFT_CARD_CODE_LENGTH,
    GIFT_CARD_CODE_PREFIX,
    GIFT_CARD_CURRENCY,
    GIFT_CARD_FALLBACK_LOGO,
)


def get_brand(brand_id: str) -> Optional[Dict[str, Any]]:
    for brand in GIFT_CARD_BRANDS:
        if brand["id"] == brand_id:
            return brand
    return None


def generate_gift_card_code() -> str:
    """
    Example: "GC-7QK2M9XA1"
    """
    body = "".join(secrets.choice(GIFT_CARD_CODE_ALPHABET) for _ in range(GIFT_CARD_CODE_LENGTH))
    return f"{GIFT_CARD_CODE_PREFIX}{body}"


def build_gift_card(brand_id: str, amount: float, message: Optional[str] = None) -> GiftCard:
    """
    Builds a gift card for a brand.

    Args:
        brand_id: Catalog brand id ("amazon")
        amount: Card value
        message: Personal note; a default note is used when empty

    Returns:
        GiftCard with a fresh redemption code
    """
    brand = get_brand(brand_id)
    brand_name = brand["name"] if brand else brand_id

    return GiftCard(
        brand=brand_id,
        brand_logo=brand["logo"] if brand else GIFT_CARD_FALLBACK_LOGO,
        amount=amount,
        currency=GIFT_CARD_CURRENCY,
        code=generate_gift_card_code(),
        message=message or f"Enjoy your {brand_name} gift card!",
    )
