"""
utils/validation_utils.py

Purpose: Input validation

- Phone normalization and length checks
- Password strength policy
- Wish code normalization
- Input sanitization
"""

import re
from typing import Optional

from utils.constants import (
    MIN_PHONE_DIGITS,
    MIN_PASSWORD_LENGTH,
    PASSWORD_TOO_SHORT,
    PASSWORD_NEEDS_LETTER,
    PASSWORD_NEEDS_DIGIT,
    WISH_CODE_ALPHABET,
    WISH_CODE_LENGTH,
)


def normalize_phone(phone: str) -> str:
    """
    Strips everything except digits from a phone number.

    Args:
        phone: Raw phone input ("(555) 123-4567")

    Returns:
        Digit string ("5551234567")
    """
    if not phone:
        return ""
    return re.sub(r"\D", "", phone)


def validate_phone(phone: str) -> bool:
    """
    Checks that a phone has at least the minimum number of digits.

    Args:
        phone: Phone number (raw or normalized)

    Returns:
        True if valid, False otherwise
    """
    return len(normalize_phone(phone)) >= MIN_PHONE_DIGITS


def validate_password(password: str) -> Optional[str]:
    """
    Applies the password strength policy.

    Args:
        password: Plain text password

    Returns:
        Error message if the password is too weak, None if acceptable
    """
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        return PASSWORD_TOO_SHORT
    if not re.search(r"[a-zA-Z]", password):
        return PASSWORD_NEEDS_LETTER
    if not re.search(r"[0-9]", password):
        return PASSWORD_NEEDS_DIGIT
    return None


def normalize_code(code: str) -> str:
    """Upper-cases and trims a wish code for comparison."""
    if not code:
        return ""
    return code.strip().upper()


def is_valid_wish_code(code: str) -> bool:
    """
    Checks that a code is drawn from the wish code alphabet.
    Comparison is case-insensitive.
    """
    code = normalize_code(code)
    return len(code) == WISH_CODE_LENGTH and all(c in WISH_CODE_ALPHABET for c in code)


def sanitize_input(text: str, max_length: int = 500) -> str:
    """
    Sanitizes user input by removing control characters and
    collapsing runs of spaces.

    Args:
        text: Input text
        max_length: Maximum allowed length

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    text = re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", text)
    text = re.sub(r"[ \t]+", " ", text).strip()

    if len(text) > max_length:
        text = text[:max_length]

    return text
