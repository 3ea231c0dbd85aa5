from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Protocol, Sequence

from ..notifications.enums import NotificationType, Priority


@dataclass(frozen=True)
class NotificationPayload:
    user_id: int
    title: str
    message: str
    type: NotificationType
    priority: Priority
    emoji: str
    related_item_id: Optional[int] = None
    related_item_type: Optional[str] = None
    action_url: Optional[str] = None


@dataclass
class NotificationRecord:
    id: int
    user_id: int
    title: str
    message: str
    type: NotificationType
    priority: Priority
    emoji: str
    related_item_id: Optional[int]
    related_item_type: Optional[str]
    action_url: Optional[str]
    created_at: datetime
    is_read: bool = False


class NotificationRepository(Protocol):
    async def create_notification(self, payload: NotificationPayload) -> NotificationRecord:
        ...

    async def get_notification(self, notification_id: int) -> Optional[NotificationRecord]:
        ...

    async def list_for_user(self, user_id: int, unread_only: bool = False, limit: int = 50, offset: int = 0) -> List[NotificationRecord]:
        ...

    async def mark_as_read(self, notification_id: int) -> Optional[NotificationRecord]:
        ...

    async def mark_all_as_read(self, user_id: int) -> int:
        ...

    async def delete_notification(self, notification_id: int) -> bool:
        ...

    async def count_unread(self, user_id: int) -> int:
        ...

    async def mark_many_as_read(self, notification_ids: Sequence[int]) -> int:
        ...
