import logging
from typing import List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select
from starlette.concurrency import run_in_threadpool

from .....db.models import Notification
from .....application.notifications.enums import NotificationType, Priority
from .....application.ports.notification_repo import (
    NotificationPayload,
    NotificationRecord,
    NotificationRepository,
)
from .....exceptions import PersistenceError

logger = logging.getLogger(__name__)


class SqlNotificationRepository(NotificationRepository):
    """SQLModel adapter. Session work runs in the threadpool."""

    def __init__(self, session: Session):
        self.session = session

    def _to_record(self, n: Notification) -> NotificationRecord:
        return NotificationRecord(
            id=n.id,
            user_id=n.user_id,
            title=n.title,
            message=n.message,
            type=NotificationType(n.type),
            priority=Priority(n.priority),
            emoji=n.emoji,
            related_item_id=n.related_item_id,
            related_item_type=n.related_item_type,
            action_url=n.action_url,
            created_at=n.created_at,
            is_read=n.read,
        )

    def _fail(self, action: str, e: Exception) -> PersistenceError:
        logger.error(f"Error {action}: {e}")
        self.session.rollback()
        return PersistenceError(f"Failed {action}")

    async def create_notification(self, payload: NotificationPayload) -> NotificationRecord:
        return await run_in_threadpool(self._create, payload)

    async def get_notification(self, notification_id: int) -> Optional[NotificationRecord]:
        return await run_in_threadpool(self._get, notification_id)

    async def list_for_user(self, user_id: int, unread_only: bool = False, limit: int = 50, offset: int = 0) -> List[NotificationRecord]:
        return await run_in_threadpool(self._list_for_user, user_id, unread_only, limit, offset)

    async def count_unread(self, user_id: int) -> int:
        return await run_in_threadpool(self._count_unread, user_id)

    async def mark_as_read(self, notification_id: int) -> Optional[NotificationRecord]:
        return await run_in_threadpool(self._mark_as_read, notification_id)

    async def mark_many_as_read(self, notification_ids: Sequence[int]) -> int:
        return await run_in_threadpool(self._mark_many_as_read, list(notification_ids))

    async def mark_all_as_read(self, user_id: int) -> int:
        return await run_in_threadpool(self._mark_all_as_read, user_id)

    async def delete_notification(self, notification_id: int) -> bool:
        return await run_in_threadpool(self._delete, notification_id)

    def _create(self, payload: NotificationPayload) -> NotificationRecord:
        row = Notification(
            user_id=payload.user_id,
            title=payload.title,
            message=payload.message,
            type=payload.type.value,
            priority=payload.priority.value,
            emoji=payload.emoji,
            related_item_id=payload.related_item_id,
            related_item_type=payload.related_item_type,
            action_url=payload.action_url,
            read=False,
        )
        try:
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        except SQLAlchemyError as e:
            raise self._fail("creating notification", e) from e
        return self._to_record(row)

    def _get(self, notification_id: int) -> Optional[NotificationRecord]:
        try:
            n = self.session.get(Notification, notification_id)
        except SQLAlchemyError as e:
            raise self._fail(f"loading notification {notification_id}", e) from e
        return self._to_record(n) if n else None

    def _list_for_user(self, user_id: int, unread_only: bool, limit: int, offset: int) -> List[NotificationRecord]:
        query = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            query = query.where(Notification.read == False)  # noqa: E712
        query = query.order_by(Notification.created_at.desc(), Notification.id.desc()).offset(offset).limit(limit)
        try:
            rows = self.session.exec(query).all()
        except SQLAlchemyError as e:
            raise self._fail(f"listing notifications for user {user_id}", e) from e
        return [self._to_record(r) for r in rows]

    def _count_unread(self, user_id: int) -> int:
        query = (
            select(func.count())
            .select_from(Notification)
            .where(Notification.user_id == user_id)
            .where(Notification.read == False)  # noqa: E712
        )
        try:
            return self.session.exec(query).one()
        except SQLAlchemyError as e:
            raise self._fail(f"counting unread notifications for user {user_id}", e) from e

    def _mark_as_read(self, notification_id: int) -> Optional[NotificationRecord]:
        try:
            n = self.session.get(Notification, notification_id)
            if not n:
                return None
            n.read = True
            self.session.add(n)
            self.session.commit()
            self.session.refresh(n)
        except SQLAlchemyError as e:
            raise self._fail(f"marking notification {notification_id} as read", e) from e
        return self._to_record(n)

    def _mark_many_as_read(self, notification_ids: List[int]) -> int:
        if not notification_ids:
            return 0
        try:
            unread = self.session.exec(
                select(Notification)
                .where(Notification.id.in_(notification_ids))
                .where(Notification.read == False)  # noqa: E712
            ).all()
            for n in unread:
                n.read = True
                self.session.add(n)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail(f"marking notifications {notification_ids} as read", e) from e
        return len(unread)

    def _mark_all_as_read(self, user_id: int) -> int:
        try:
            unread = self.session.exec(
                select(Notification)
                .where(Notification.user_id == user_id)
                .where(Notification.read == False)  # noqa: E712
            ).all()
            for n in unread:
                n.read = True
                self.session.add(n)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail(f"marking all notifications as read for user {user_id}", e) from e
        return len(unread)

    def _delete(self, notification_id: int) -> bool:
        try:
            n = self.session.get(Notification, notification_id)
            if not n:
                return False
            self.session.delete(n)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail(f"deleting notification {notification_id}", e) from e
        return True
