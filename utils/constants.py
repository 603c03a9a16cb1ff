"""
utils/constants.py

Purpose: Centralized static content

- Storage slot names
- Wish code alphabet
- Occasion and gift card catalogs
- SMS and notification templates

(Prevents hardcoding across the codebase)
"""

# ============================================================
# STORAGE
# ============================================================

WISHES_KEY = "wishlink_wishes"
USERS_KEY = "wishlink_users"
CURRENT_USER_KEY = "wishlink_current_user"

# ============================================================
# WISH CODES
# ============================================================

# Uppercase letters without I and O, digits without 0 and 1
WISH_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
WISH_CODE_LENGTH = 6

GIFT_CARD_CODE_PREFIX = "GC-"
GIFT_CARD_CODE_LENGTH = 9
GIFT_CARD_CODE_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
GIFT_CARD_CURRENCY = "$"
GIFT_CARD_FALLBACK_LOGO = "🎁"

# ============================================================
# FORM LIMITS
# ============================================================

MIN_PHONE_DIGITS = 10
MIN_PASSWORD_LENGTH = 6
MIN_MESSAGE_LENGTH = 10
MAX_MESSAGE_LENGTH = 500
MAX_PHOTOS = 5
MAX_GIFT_MESSAGE_LENGTH = 200

# ============================================================
# OCCASIONS
# ============================================================

OCCASION_OTHER = "other"

OCCASIONS = [
    {"value": "birthday", "label": "Birthday", "icon": "🎂"},
    {"value": "anniversary", "label": "Anniversary", "icon": "💕"},
    {"value": "wedding", "label": "Wedding", "icon": "💍"},
    {"value": "graduation", "label": "Graduation", "icon": "🎓"},
    {"value": "new_year", "label": "New Year", "icon": "🎉"},
    {"value": "valentine", "label": "Valentine's Day", "icon": "❤️"},
    {"value": "mothers_day", "label": "Mother's Day", "icon": "👩‍👧"},
    {"value": "fathers_day", "label": "Father's Day", "icon": "👨‍👧"},
    {"value": "christmas", "label": "Christmas", "icon": "🎄"},
    {"value": "diwali", "label": "Diwali", "icon": "🪔"},
    {"value": "eid", "label": "Eid", "icon": "🌙"},
    {"value": OCCASION_OTHER, "label": "Other", "icon": "✨"},
]

OCCASION_VALUES = [occasion["value"] for occasion in OCCASIONS]

# ============================================================
# GIFT CARDS
# ============================================================

GIFT_CARD_BRANDS = [
    {"id": "amazon", "name": "Amazon", "logo": "📦", "colors": ["#FF9900", "#232F3E"]},
    {"id": "starbucks", "name": "Starbucks", "logo": "☕", "colors": ["#00704A", "#FFFFFF"]},
    {"id": "apple", "name": "Apple", "logo": "🍎", "colors": ["#555555", "#000000"]},
    {"id": "google", "name": "Google Play", "logo": "▶️", "colors": ["#4285F4", "#34A853", "#FBBC05", "#EA4335"]},
    {"id": "netflix", "name": "Netflix", "logo": "🎬", "colors": ["#E50914", "#000000"]},
    {"id": "spotify", "name": "Spotify", "logo": "🎵", "colors": ["#1DB954", "#191414"]},
    {"id": "uber", "name": "Uber", "logo": "🚗", "colors": ["#000000", "#FFFFFF"]},
    {"id": "doordash", "name": "DoorDash", "logo": "🍔", "colors": ["#FF3008", "#FFFFFF"]},
    {"id": "target", "name": "Target", "logo": "🎯", "colors": ["#CC0000", "#FFFFFF"]},
    {"id": "walmart", "name": "Walmart", "logo": "🛒", "colors": ["#0071CE", "#FFC220"]},
    {"id": "nike", "name": "Nike", "logo": "👟", "colors": ["#111111", "#FFFFFF"]},
    {"id": "adidas", "name": "Adidas", "logo": "⚽", "colors": ["#000000", "#FFFFFF"]},
    {"id": "sephora", "name": "Sephora", "logo": "💄", "colors": ["#000000", "#FF0000"]},
    {"id": "ubereats", "name": "Uber Eats", "logo": "🍕", "colors": ["#06C167", "#000000"]},
    {"id": "airbnb", "name": "Airbnb", "logo": "🏠", "colors": ["#FF5A5F", "#FFFFFF"]},
]

GIFT_AMOUNTS = [10, 25, 50, 100, 150, 200, 250, 500]

# ============================================================
# SMS & NOTIFICATIONS
# ============================================================

WISH_SMS_TEMPLATE = (
    "Hey {recipient_name}! 🎉 {sender_name} has a special wish for you on your "
    "{occasion}! Use this code: {code} at WishLink to see your surprise! ✨"
)

NOTIFICATION_TITLE = "WishLink SMS Sent!"
NOTIFICATION_BODY_TEMPLATE = "SMS sent to {recipient_name} for {occasion}"

# ============================================================
# PASSWORD POLICY MESSAGES
# ============================================================

PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
PASSWORD_NEEDS_LETTER = "Password must contain at least one letter"
PASSWORD_NEEDS_DIGIT = "Password must contain at least one number"
PASSWORDS_DO_NOT_MATCH = "Passwords do not match"
