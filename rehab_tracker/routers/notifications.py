"""Notifications API router."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from rehab_tracker.database import get_db
from rehab_tracker.models import User
from rehab_tracker.routers.auth import get_current_user
from rehab_tracker.schemas import MessageResponse, NotificationResponse, UnreadCount
from rehab_tracker.services.notification_service import NotificationService, DEFAULT_LIMIT

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/{user_id}", response_model=List[NotificationResponse])
def list_notifications(
    user_id: int,
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=500),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """The caller's notifications, newest first."""
    return NotificationService(db).list_for_user(user, user_id, limit=limit)


@router.get("/{user_id}/unread-count", response_model=UnreadCount)
def get_unread_count(
    user_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return UnreadCount(user_id=user_id, unread=NotificationService(db).unread_count(user, user_id))


@router.put("/{notification_id}/read", response_model=MessageResponse)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    NotificationService(db).mark_read(user, notification_id)
    return MessageResponse(message="Notification marked as read")


@router.put("/{user_id}/read-all", response_model=MessageResponse)
def mark_all_read(
    user_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    NotificationService(db).mark_all_read(user, user_id)
    return MessageResponse(message="All notifications marked as read")
