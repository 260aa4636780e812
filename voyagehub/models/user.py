import copy

from sqlalchemy import Column, String, DateTime, JSON

from voyagehub.db import Base
from voyagehub.models.types import new_id
from voyagehub.utils.date_utils import utcnow


DEFAULT_PREFERENCES = {
    "currency": "USD",
    "timezone": "UTC",
    "notifications": {
        "email": True,
        "push": True,
        "reminders": True,
    },
    "theme": "light",
}


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    avatar = Column(String, nullable=True)

    # currency, timezone, notification flags and theme
    preferences = Column(JSON, nullable=False, default=lambda: copy.deepcopy(DEFAULT_PREFERENCES))

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
