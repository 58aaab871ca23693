"""Notification service - per-user append-only event log."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from rehab_tracker.database import commit_or_raise
from rehab_tracker.errors import NotFound, StorageError
from rehab_tracker.models import Notification, User
from rehab_tracker.services import access_guard

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50


class NotificationService:
    """Service for creating and reading notifications."""

    def __init__(self, db: Session):
        self.db = db

    def notify(self, user_id: int, title: str, message: str, type: str) -> Notification:
        """Append a notification. No dedup and no rate limiting."""
        notification = Notification(
            user_id=user_id,
            title=title,
            message=message,
            type=type,
            is_read=False,
        )
        self.db.add(notification)
        commit_or_raise(self.db, "Failed to create notification")
        self.db.refresh(notification)
        return notification

    def notify_best_effort(
        self, user_id: int, title: str, message: str, type: str
    ) -> Optional[Notification]:
        """
        Side-effect notification that never fails the calling operation.

        The triggering write has already been committed when this runs, so a
        failure here is logged and dropped: delivery is at most one attempt.
        """
        try:
            return self.notify(user_id, title, message, type)
        except StorageError:
            logger.warning("Dropped %r notification for user %s", type, user_id)
            return None

    def list_for_user(self, caller: User, user_id: int, limit: int = DEFAULT_LIMIT) -> List[Notification]:
        """Newest first."""
        access_guard.require_self(caller, user_id)
        return (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
            .all()
        )

    def unread_count(self, caller: User, user_id: int) -> int:
        access_guard.require_self(caller, user_id)
        return (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.is_read == False)  # noqa: E712
            .count()
        )

    def mark_read(self, caller: User, notification_id: int) -> Notification:
        """Idempotent. Someone else's notification looks the same as a missing one."""
        notification = (
            self.db.query(Notification)
            .filter(Notification.id == notification_id, Notification.user_id == caller.id)
            .first()
        )
        if not notification:
            raise NotFound("Notification not found or access denied")

        if not notification.is_read:
            notification.is_read = True
            commit_or_raise(self.db, "Failed to update notification")
            self.db.refresh(notification)
        return notification

    def mark_all_read(self, caller: User, user_id: int) -> int:
        """Flag every notification of the user as read; returns how many changed."""
        access_guard.require_self(caller, user_id)
        updated = (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.is_read == False)  # noqa: E712
            .update({Notification.is_read: True}, synchronize_session=False)
        )
        commit_or_raise(self.db, "Failed to update notifications")
        return updated
