"""
wishlink/api/wishes.py

Purpose: Wish endpoints

- Create wishes; update / delete by the logged-in sender
- Public lookup by code
- Sent/received lists for the logged-in phone
"""

from typing import List

from fastapi import APIRouter, Depends, Response

from wishlink.api.deps import get_context, require_user
from wishlink.core.context import AppContext
from wishlink.core.exceptions import AuthenticationError, ResourceNotFoundError
from wishlink.core.logging import get_logger
from wishlink.models.user import UserProfile
from wishlink.models.wish import Wish
from wishlink.schemas.wish import WishRequest
from utils.validation_utils import is_valid_wish_code, normalize_phone

logger = get_logger(__name__)
router = APIRouter(prefix="/wishes")


def _ensure_owner(user: UserProfile, phone: str) -> str:
    phone = normalize_phone(phone)
    if user.phone != phone:
        raise AuthenticationError("Login with this phone number to see its wishes")
    return phone


def _ensure_sender(user: UserProfile, wish: Wish) -> None:
    if user.phone != wish.sender_phone:
        raise AuthenticationError("Only the sender can change this wish")


@router.post("", response_model=Wish, status_code=201)
async def create_wish(body: WishRequest, context: AppContext = Depends(get_context)):
    """
    Creates a wish and returns it with its share code.
    """
    return context.wishes.create(body.to_form())


@router.put("/{wish_id}", response_model=Wish)
async def update_wish(
    wish_id: str,
    body: WishRequest,
    user: UserProfile = Depends(require_user),
    context: AppContext = Depends(get_context),
):
    """
    Replaces a wish's content. The logged-in phone must be the sender,
    before and after the edit.
    """
    existing = context.wishes.get(wish_id)
    if existing is None:
        raise ResourceNotFoundError("Wish not found")
    _ensure_sender(user, existing)
    if body.sender_phone != user.phone:
        raise AuthenticationError("A wish cannot be moved to another sender")

    wish = context.wishes.update(wish_id, body.to_form())
    if wish is None:
        raise ResourceNotFoundError("Wish not found")
    return wish


@router.delete("/{wish_id}", status_code=204)
async def delete_wish(
    wish_id: str,
    user: UserProfile = Depends(require_user),
    context: AppContext = Depends(get_context),
):
    existing = context.wishes.get(wish_id)
    if existing is not None:
        _ensure_sender(user, existing)
        context.wishes.delete(wish_id)
    return Response(status_code=204)


@router.get("/code/{code}", response_model=Wish)
async def get_wish_by_code(code: str, context: AppContext = Depends(get_context)):
    """
    Looks up a wish by its share code (any letter case).
    """
    wish = context.wishes.find_by_code(code) if is_valid_wish_code(code) else None
    if wish is None:
        raise ResourceNotFoundError("No wish found with this code")
    return wish


@router.get("/sent/{phone}", response_model=List[Wish])
async def list_sent_wishes(
    phone: str,
    user: UserProfile = Depends(require_user),
    context: AppContext = Depends(get_context),
):
    return context.wishes.list_by_sender_phone(_ensure_owner(user, phone))


@router.get("/received/{phone}", response_model=List[Wish])
async def list_received_wishes(
    phone: str,
    user: UserProfile = Depends(require_user),
    context: AppContext = Depends(get_context),
):
    return context.wishes.list_by_recipient_phone(_ensure_owner(user, phone))
