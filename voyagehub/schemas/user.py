from typing import Literal, Optional
from datetime import datetime

from pydantic import EmailStr, Field

from voyagehub.schemas.base import CamelModel, PatchModel


class NotificationPreferences(CamelModel):
    email: bool = True
    push: bool = True
    reminders: bool = True


class UserPreferences(CamelModel):
    currency: str = "USD"
    timezone: str = "UTC"
    notifications: NotificationPreferences = Field(default_factory=NotificationPreferences)
    theme: Literal["light", "dark", "system"] = "light"


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=8)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserResponse(CamelModel):
    id: str
    email: str
    first_name: str
    last_name: str
    avatar: Optional[str] = None
    preferences: UserPreferences
    created_at: datetime
    updated_at: datetime


class AuthResponse(CamelModel):
    user: UserResponse
    token: str


class ProfileUpdate(PatchModel):
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    avatar: Optional[str] = None
    # Nested keys are merged over the stored preferences
    preferences: Optional[dict] = None
