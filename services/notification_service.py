# services/notification_service.py
"""
Notification dispatcher.

Core operations call notify() while their transaction is open. Nothing is
written at that point: the message is queued on the session and written
by a separate session once the owning transaction commits. A rollback
drops the queue. Delivery is at-most-once: a failed write is logged and
never reaches the caller.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import event, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from errors import ForbiddenError, NotFoundError
from models import Notification

logger = logging.getLogger(__name__)

_PENDING_KEY = "pending_notifications"


@dataclass(frozen=True)
class PendingNotification:
     to_user_id: int
     title: str
     message: str
     created_by_id: Optional[int] = None


def notify(
     db: Session,
     to_user_id: int,
     title: str,
     message: str,
     created_by_id: Optional[int] = None,
) -> None:
     """Queue a notification for delivery after db commits."""
     db.info.setdefault(_PENDING_KEY, []).append(
          PendingNotification(
               to_user_id=to_user_id,
               title=title,
               message=message,
               created_by_id=created_by_id,
          )
     )


def pending_notifications(db: Session) -> List[PendingNotification]:
     """Notifications queued on db and not yet delivered."""
     return list(db.info.get(_PENDING_KEY, []))


def deliver(db: Session, pending: List[PendingNotification]) -> None:
     """Write notifications in a session of their own."""
     with Session(bind=db.get_bind()) as outbox:
          for item in pending:
               outbox.add(
                    Notification(
                         title=item.title,
                         message=item.message,
                         to_user_id=item.to_user_id,
                         created_by_id=item.created_by_id,
                         is_read=False,
                    )
               )
          outbox.commit()


@event.listens_for(Session, "after_commit")
def _deliver_after_commit(session: Session) -> None:
     pending = session.info.pop(_PENDING_KEY, None)
     if not pending:
          return
     try:
          deliver(session, pending)
     except SQLAlchemyError:
          logger.warning("Dropped %d notification(s) after commit", len(pending), exc_info=True)
     else:
          logger.debug("Delivered %d notification(s)", len(pending))


@event.listens_for(Session, "after_rollback")
def _discard_after_rollback(session: Session) -> None:
     session.info.pop(_PENDING_KEY, None)


def list_for_user(db: Session, user_id: int) -> List[Notification]:
     """Unread notifications addressed to the user, newest first."""
     stmt = (
          select(Notification)
          .where(Notification.to_user_id == user_id, Notification.is_read.is_(False))
          .order_by(Notification.created_at.desc(), Notification.id.desc())
     )
     return list(db.execute(stmt).scalars())


def mark_as_read(db: Session, notification_id: int, user_id: int) -> Notification:
     notification = db.get(Notification, notification_id)
     if notification is None:
          raise NotFoundError("Notification not found")
     if notification.to_user_id != user_id:
          raise ForbiddenError("You do not have permission to mark this notification as read")
     notification.is_read = True
     db.flush()
     return notification
