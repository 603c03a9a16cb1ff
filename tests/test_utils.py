import pytest

from wishlink.services.gift_card_service import build_gift_card, generate_gift_card_code, get_brand
from utils.constants import GIFT_CARD_FALLBACK_LOGO, OCCASION_VALUES
from utils.sms_utils import build_wish_sms, mask_phone
from utils.validation_utils import (
    is_valid_wish_code,
    normalize_code,
    normalize_phone,
    sanitize_input,
    validate_password,
    validate_phone,
)


@pytest.mark.parametrize("raw,expected", [
    ("(555) 123-4567", "5551234567"),
    ("+1 555 123 4567", "15551234567"),
    ("", ""),
])
def test_normalize_phone(raw, expected):
    assert normalize_phone(raw) == expected


def test_validate_phone():
    assert validate_phone("555-123-4567")
    assert not validate_phone("555-1234")


@pytest.mark.parametrize("password,ok", [
    ("abc123", True),
    ("abc12", False),
    ("123456", False),
    ("abcdef", False),
])
def test_password_policy(password, ok):
    assert (validate_password(password) is None) == ok


def test_wish_code_helpers():
    assert normalize_code(" ab3xyz ") == "AB3XYZ"
    assert is_valid_wish_code("ab3xyz")
    assert not is_valid_wish_code("AB0XYZ")
    assert not is_valid_wish_code("ABCDE")


def test_sanitize_input():
    assert sanitize_input("  Happy\x00   birthday\t!  ") == "Happy birthday !"
    assert sanitize_input("x" * 20, max_length=5) == "xxxxx"


def test_wish_sms_text():
    assert build_wish_sms("Ravi", "Asha", "birthday", "AB3XYZ") == (
        "Hey Ravi! 🎉 Asha has a special wish for you on your birthday! "
        "Use this code: AB3XYZ at WishLink to see your surprise! ✨"
    )


def test_mask_phone():
    assert mask_phone("5559876543") == "******6543"
    assert mask_phone("123") == "123"


def test_gift_card_code_format():
    code = generate_gift_card_code()
    assert code.startswith("GC-")
    assert len(code) == 12
    assert code[3:].isalnum() and code[3:].upper() == code[3:]


def test_build_gift_card_for_known_brand():
    brand = get_brand("amazon")
    card = build_gift_card("amazon", 50)

    assert card.brand_logo == brand["logo"]
    assert card.amount == 50
    assert card.currency == "$"
    assert card.message == f"Enjoy your {brand['name']} gift card!"


def test_build_gift_card_for_unknown_brand():
    card = build_gift_card("mystery", 10, message="For you")
    assert card.brand_logo == GIFT_CARD_FALLBACK_LOGO
    assert card.message == "For you"


def test_occasion_catalog_has_other():
    assert "birthday" in OCCASION_VALUES
    assert "other" in OCCASION_VALUES
