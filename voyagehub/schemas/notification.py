from typing import Optional
from datetime import datetime

from pydantic import Field

from voyagehub.models.notification import NotificationType
from voyagehub.schemas.base import CamelModel


class NotificationCreate(CamelModel):
    user_id: str = Field(min_length=1)
    type: NotificationType
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    action_url: Optional[str] = None


class NotificationResponse(CamelModel):
    id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    read: bool
    action_url: Optional[str] = None
    created_at: datetime
