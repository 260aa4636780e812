from typing import List, Optional
from datetime import date, datetime

from pydantic import EmailStr, Field, field_validator

from voyagehub.models.document import DocumentType
from voyagehub.schemas.base import CamelModel, PatchModel, clean_text


class DocumentUpdate(PatchModel):
    title: Optional[str] = Field(default=None, min_length=1)
    type: Optional[DocumentType] = None
    expiration_date: Optional[date] = None
    shared_with: Optional[List[EmailStr]] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: Optional[str]) -> Optional[str]:
        return clean_text(value)


class DocumentResponse(CamelModel):
    id: str
    vacation_id: str
    title: str
    type: DocumentType
    file_name: str
    file_url: str
    file_size: int
    mime_type: str
    expiration_date: Optional[date] = None
    shared_with: List[str]
    uploaded_by: str
    created_at: datetime
    updated_at: datetime
