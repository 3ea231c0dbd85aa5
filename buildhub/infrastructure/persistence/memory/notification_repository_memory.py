from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from ....application.ports.notification_repo import (
    NotificationPayload,
    NotificationRecord,
    NotificationRepository,
)
from ....db.models import utc_now


class InMemoryNotificationRepository(NotificationRepository):
    """Process-local store with incrementing ids. Used in tests and local runs."""

    def __init__(self) -> None:
        self._rows: Dict[int, NotificationRecord] = {}
        self._next_id = 1

    async def create_notification(self, payload: NotificationPayload) -> NotificationRecord:
        record = NotificationRecord(
            id=self._next_id,
            user_id=payload.user_id,
            title=payload.title,
            message=payload.message,
            type=payload.type,
            priority=payload.priority,
            emoji=payload.emoji,
            related_item_id=payload.related_item_id,
            related_item_type=payload.related_item_type,
            action_url=payload.action_url,
            created_at=utc_now(),
            is_read=False,
        )
        self._rows[record.id] = record
        self._next_id += 1
        return record

    async def get_notification(self, notification_id: int) -> Optional[NotificationRecord]:
        return self._rows.get(notification_id)

    async def list_for_user(self, user_id: int, unread_only: bool = False, limit: int = 50, offset: int = 0) -> List[NotificationRecord]:
        rows = [r for r in self._rows.values() if r.user_id == user_id and not (unread_only and r.is_read)]
        rows.sort(key=lambda r: (r.created_at, r.id), reverse=True)
        return rows[offset:offset + limit]

    async def mark_as_read(self, notification_id: int) -> Optional[NotificationRecord]:
        record = self._rows.get(notification_id)
        if not record:
            return None
        record = replace(record, is_read=True)
        self._rows[notification_id] = record
        return record

    async def mark_all_as_read(self, user_id: int) -> int:
        count = 0
        for notification_id, record in list(self._rows.items()):
            if record.user_id == user_id and not record.is_read:
                self._rows[notification_id] = replace(record, is_read=True)
                count += 1
        return count

    async def delete_notification(self, notification_id: int) -> bool:
        return self._rows.pop(notification_id, None) is not None

    async def count_unread(self, user_id: int) -> int:
        return sum(1 for r in self._rows.values() if r.user_id == user_id and not r.is_read)

    async def mark_many_as_read(self, notification_ids: Sequence[int]) -> int:
        count = 0
        for notification_id in set(notification_ids):
            record = self._rows.get(notification_id)
            if record and not record.is_read:
                self._rows[notification_id] = replace(record, is_read=True)
                count += 1
        return count
