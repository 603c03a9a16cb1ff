"""
wishlink/models/user.py

Purpose: User profile model

- Phone number (unique key)
- Password digest (never the plaintext)
- Creation timestamp
"""

from datetime import datetime

from pydantic import BaseModel, model_validator

# Keys written by the first WishLink release
STORED_USER_KEYS = {
    "passwordHash": "password_digest",
    "passwordDigest": "password_digest",
    "createdAt": "created_at",
}


class UserProfile(BaseModel):
    phone: str
    password_digest: str
    created_at: datetime

    @model_validator(mode="before")
    @classmethod
    def accept_stored_keys(cls, data):
        if isinstance(data, dict):
            return {STORED_USER_KEYS.get(k, k): v for k, v in data.items()}
        return data
