"""
wishlink/schemas/auth.py

Purpose: Auth request/response schemas

- Password strength policy for new passwords
- Phone normalization
- Public user shape (never exposes the digest)
"""

from datetime import datetime

from pydantic import BaseModel, field_validator, model_validator

from utils.constants import MIN_PHONE_DIGITS, PASSWORDS_DO_NOT_MATCH
from utils.validation_utils import normalize_phone, validate_phone, validate_password


def _phone(v: str) -> str:
    if not validate_phone(v):
        raise ValueError(f"Phone number must have at least {MIN_PHONE_DIGITS} digits")
    return normalize_phone(v)


def _strong_password(v: str) -> str:
    error = validate_password(v)
    if error:
        raise ValueError(error)
    return v


class RegisterRequest(BaseModel):
    phone: str
    password: str
    confirm_password: str

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return _phone(v)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v):
        return _strong_password(v)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError(PASSWORDS_DO_NOT_MATCH)
        return self


class LoginRequest(BaseModel):
    phone: str
    password: str

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return _phone(v)


class ChangePasswordRequest(BaseModel):
    phone: str
    old_password: str
    new_password: str

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return _phone(v)

    @field_validator("new_password")
    @classmethod
    def validate_password_strength(cls, v):
        return _strong_password(v)


class UserResponse(BaseModel):
    phone: str
    created_at: datetime


class RegistrationStatus(BaseModel):
    phone: str
    registered: bool
