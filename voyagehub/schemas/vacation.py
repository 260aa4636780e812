from typing import List, Optional
from datetime import date, datetime

from pydantic import ConfigDict, EmailStr, Field, field_validator, model_validator

from voyagehub.models.vacation import VacationStatus
from voyagehub.schemas.base import CamelModel, PatchModel, clean_text
from voyagehub.schemas.budget import BudgetResponse


class Coordinates(CamelModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class Destination(CamelModel):
    """
    A stop on the itinerary.

    Accommodation and activity details are kept as the client sends them.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: str = Field(min_length=1)
    country: Optional[str] = None
    city: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


def _normalize_emails(values: List[str]) -> List[str]:
    seen = []
    for value in values:
        email = str(value).strip().lower()
        if email not in seen:
            seen.append(email)
    return seen


class VacationCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    start_date: date
    end_date: date
    destinations: List[Destination] = Field(default_factory=list)
    collaborators: List[EmailStr] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return clean_text(v)

    @field_validator("collaborators")
    @classmethod
    def dedupe_collaborators(cls, v):
        return _normalize_emails(v)

    @model_validator(mode="after")
    def check_dates(self) -> "VacationCreate":
        if self.start_date >= self.end_date:
            raise ValueError("startDate must be before endDate")
        return self


class VacationUpdate(PatchModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[VacationStatus] = None
    destinations: Optional[List[Destination]] = None
    collaborators: Optional[List[EmailStr]] = None
    is_public: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: Optional[str]) -> Optional[str]:
        return clean_text(v)

    @field_validator("collaborators")
    @classmethod
    def dedupe_collaborators(cls, v):
        if v is None:
            return v
        return _normalize_emails(v)


class VacationResponse(CamelModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    start_date: date
    end_date: date
    status: VacationStatus
    destinations: List[Destination]
    collaborators: List[str]
    is_public: bool
    created_at: datetime
    updated_at: datetime
    budget: Optional[BudgetResponse] = None


class CascadeDeleteResponse(CamelModel):
    message: str
    deleted: dict
