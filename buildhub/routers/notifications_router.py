from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session
import logging

from ..application.notifications.rules import get_default_rules
from ..application.ports.notification_repo import NotificationRepository
from ..application.services.notification_service import NotificationContent, NotificationService
from ..config import settings
from ..exceptions import NotificationNotFound
from ..infrastructure.persistence.sqlalchemy.repositories.notification_repository_sql import SqlNotificationRepository
from ..database import get_session
from ..schemas import (
    CountResponse,
    MessageResponse,
    NotificationBatchCreate,
    NotificationCreate,
    NotificationIds,
    NotificationResponse,
    UnreadCountResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def get_notification_repository(session: Session = Depends(get_session)) -> NotificationRepository:
    return SqlNotificationRepository(session)


def get_notification_service(repo: NotificationRepository = Depends(get_notification_repository)) -> NotificationService:
    return NotificationService(
        repo=repo,
        rules=get_default_rules(settings.NOTIFICATION_FALLBACK_EMOJI),
        urgent_emoji=settings.URGENT_EMOJI,
        preview_length=settings.MESSAGE_PREVIEW_LENGTH,
        critical_ratio=settings.CRITICAL_INVENTORY_RATIO,
    )


def _content(data) -> NotificationContent:
    return NotificationContent(
        title=data.title,
        message=data.message,
        type=data.type,
        related_item_id=data.related_item_id,
        related_item_type=data.related_item_type,
        action_url=data.action_url,
    )


@router.post("/", response_model=NotificationResponse, status_code=201)
async def create_notification(data: NotificationCreate, service: NotificationService = Depends(get_notification_service)):
    record = await service.create_smart_notification(
        data.user_id,
        _content(data),
        context=data.context,
        emoji=data.emoji,
        priority=data.priority,
    )
    return NotificationResponse.model_validate(record)


@router.post("/batch", response_model=List[NotificationResponse], status_code=201)
async def create_batch_notifications(data: NotificationBatchCreate, service: NotificationService = Depends(get_notification_service)):
    if len(data.user_ids) > settings.BATCH_MAX_RECIPIENTS:
        raise HTTPException(status_code=400, detail=f"Too many recipients (max {settings.BATCH_MAX_RECIPIENTS})")
    records = await service.notify_multiple_users(data.user_ids, _content(data), context=data.context)
    return [NotificationResponse.model_validate(r) for r in records]


@router.get("/", response_model=List[NotificationResponse])
async def list_notifications(
    user_id: int = Query(...),
    unread_only: bool = Query(False),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    repo: NotificationRepository = Depends(get_notification_repository),
):
    records = await repo.list_for_user(user_id, unread_only=unread_only, limit=limit, offset=offset)
    return [NotificationResponse.model_validate(r) for r in records]


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(user_id: int = Query(...), repo: NotificationRepository = Depends(get_notification_repository)):
    count = await repo.count_unread(user_id)
    return UnreadCountResponse(user_id=user_id, unread_count=count)


@router.put("/read", response_model=CountResponse)
async def mark_notifications_read(data: NotificationIds, repo: NotificationRepository = Depends(get_notification_repository)):
    count = await repo.mark_many_as_read(data.ids)
    return CountResponse(message="Notifications marked as read", updated_count=count)


@router.put("/read-all", response_model=CountResponse)
async def mark_all_notifications_read(user_id: int = Query(...), repo: NotificationRepository = Depends(get_notification_repository)):
    count = await repo.mark_all_as_read(user_id)
    return CountResponse(message="All notifications marked as read", updated_count=count)


@router.get("/{notification_id}", response_model=NotificationResponse)
async def get_notification(notification_id: int, repo: NotificationRepository = Depends(get_notification_repository)):
    record = await repo.get_notification(notification_id)
    if not record:
        raise NotificationNotFound(notification_id)
    return NotificationResponse.model_validate(record)


@router.put("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(notification_id: int, repo: NotificationRepository = Depends(get_notification_repository)):
    record = await repo.mark_as_read(notification_id)
    if not record:
        raise NotificationNotFound(notification_id)
    return NotificationResponse.model_validate(record)


@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(notification_id: int, repo: NotificationRepository = Depends(get_notification_repository)):
    if not await repo.delete_notification(notification_id):
        raise NotificationNotFound(notification_id)
    logger.info(f"Deleted notification {notification_id}")
    return MessageResponse(message="Notification deleted successfully")
