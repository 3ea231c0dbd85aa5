# buildhub/db/models/notifications/notification.py
from typing import Optional
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Notification(SQLModel, table=True):
    __tablename__ = "notifications"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    title: str
    message: str
    type: str = Field(index=True)
    priority: str = Field(default="normal")
    emoji: str
    related_item_id: Optional[int] = Field(default=None)
    related_item_type: Optional[str] = Field(default=None)
    action_url: Optional[str] = Field(default=None)
    read: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
