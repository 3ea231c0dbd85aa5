# buildhub/schemas/notifications/notification.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

from ...application.notifications.enums import NotificationType, Priority


class NotificationBase(BaseModel):
    title: str = Field(min_length=1)
    message: str
    # Validated by the service so unknown types surface as InvalidNotificationType
    type: str
    related_item_id: Optional[int] = None
    related_item_type: Optional[str] = None
    action_url: Optional[str] = None


class NotificationCreate(NotificationBase):
    user_id: int
    context: Optional[str] = None
    emoji: Optional[str] = None
    priority: Optional[Priority] = None


class NotificationBatchCreate(NotificationBase):
    user_ids: List[int] = Field(min_length=1)
    context: Optional[str] = None


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    message: str
    type: NotificationType
    priority: Priority
    emoji: str
    related_item_id: Optional[int] = None
    related_item_type: Optional[str] = None
    action_url: Optional[str] = None
    created_at: datetime
    is_read: bool


class NotificationIds(BaseModel):
    ids: List[int]


class UnreadCountResponse(BaseModel):
    success: bool = True
    user_id: int
    unread_count: int
