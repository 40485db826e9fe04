# routers/notifications.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_actor
from schemas.notification import NotificationResponse
from services import notification_service
from services.actor import ActorContext

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationResponse], summary="Unread notifications")
def list_notifications(
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     return [
          NotificationResponse.model_validate(n)
          for n in notification_service.list_for_user(db, actor.id)
     ]


@router.patch("/{notification_id}/read", response_model=NotificationResponse, summary="Mark a notification as read")
def mark_notification_read(
     notification_id: int,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     notification = notification_service.mark_as_read(db, notification_id, actor.id)
     db.commit()
     return NotificationResponse.model_validate(notification)
