"""
wishlink/api/notifications.py

Purpose: Notification endpoints

- Pending SMS for today (audit, nothing is sent)
- Manual notification pass (ignores the send hour)
- Delivery confirmation callback
"""

from typing import List

from fastapi import APIRouter, Depends

from wishlink.api.deps import get_context
from wishlink.core.context import AppContext
from wishlink.core.exceptions import ResourceNotFoundError
from wishlink.models.wish import Wish
from wishlink.schemas.wish import DeliveryResultRequest

router = APIRouter(prefix="/notifications")


@router.get("/pending", response_model=List[Wish])
async def pending_notifications(context: AppContext = Depends(get_context)):
    return context.poller.pending_report()


@router.post("/run", response_model=List[Wish])
async def run_notifications(context: AppContext = Depends(get_context)):
    """
    Sends every SMS due today right away and returns the wishes notified.
    """
    return context.poller.check_and_send(enforce_send_hour=False)


@router.post("/{wish_id}/delivery", response_model=Wish)
async def record_delivery(wish_id: str, body: DeliveryResultRequest, context: AppContext = Depends(get_context)):
    """
    Confirms or fails an attempted SMS.
    """
    wish = context.wishes.record_delivery_result(wish_id, body.delivered)
    if wish is None:
        raise ResourceNotFoundError("No SMS awaiting confirmation for this wish")
    return wish
