import enum
from sqlalchemy import Column, String, Integer, Date, DateTime, ForeignKey, JSON, Enum as SQLEnum

from voyagehub.db import Base
from voyagehub.models.types import new_id
from voyagehub.utils.date_utils import utcnow


class DocumentType(enum.Enum):
    PASSPORT = "passport"
    VISA = "visa"
    TICKET = "ticket"
    INSURANCE = "insurance"
    OTHER = "other"


class Document(Base):
    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=new_id)
    vacation_id = Column(String(36), ForeignKey("vacations.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    type = Column(
        SQLEnum(DocumentType, name="document_type_enum", values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
    )
    file_name = Column(String, nullable=False)
    file_url = Column(String, nullable=False)
    file_size = Column(Integer, nullable=False)
    mime_type = Column(String, nullable=False)
    expiration_date = Column(Date, nullable=True)
    shared_with = Column(JSON, nullable=False, default=list)
    uploaded_by = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    @property
    def stored_name(self) -> str:
        """File name on disk, the last segment of ``file_url``."""
        return self.file_url.rsplit("/", 1)[-1]
