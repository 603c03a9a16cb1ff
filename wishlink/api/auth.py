"""
wishlink/api/auth.py

Purpose: Auth endpoints

- Registration check, register, login, logout
- Current user
- Password change
"""

from fastapi import APIRouter, Depends

from wishlink.api.deps import get_context, require_user
from wishlink.core.context import AppContext
from wishlink.core.exceptions import AuthenticationError, ConflictError
from wishlink.models.user import UserProfile
from wishlink.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    RegistrationStatus,
    UserResponse,
)
from wishlink.schemas.response import StatusResponse
from utils.validation_utils import normalize_phone

router = APIRouter(prefix="/auth")


def _user_response(user: UserProfile) -> UserResponse:
    return UserResponse(phone=user.phone, created_at=user.created_at)


@router.get("/registered/{phone}", response_model=RegistrationStatus)
async def registration_status(phone: str, context: AppContext = Depends(get_context)):
    """
    Tells the client whether to show the login or the register form.
    """
    phone = normalize_phone(phone)
    return RegistrationStatus(phone=phone, registered=context.auth.is_registered(phone))


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(body: RegisterRequest, context: AppContext = Depends(get_context)):
    if not context.auth.register(body.phone, body.password):
        raise ConflictError("This phone number is already registered")
    return _user_response(context.auth.current_user())


@router.post("/login", response_model=UserResponse)
async def login(body: LoginRequest, context: AppContext = Depends(get_context)):
    if not context.auth.login(body.phone, body.password):
        raise AuthenticationError("Invalid password. Please try again.")
    return _user_response(context.auth.current_user())


@router.post("/logout", response_model=StatusResponse)
async def logout(context: AppContext = Depends(get_context)):
    context.auth.logout()
    return StatusResponse(status="logged_out")


@router.get("/me", response_model=UserResponse)
async def me(user: UserProfile = Depends(require_user)):
    return _user_response(user)


@router.post("/change-password", response_model=StatusResponse)
async def change_password(body: ChangePasswordRequest, context: AppContext = Depends(get_context)):
    if not context.auth.change_password(body.phone, body.old_password, body.new_password):
        raise AuthenticationError("Current password is incorrect")
    return StatusResponse(status="password_changed")
