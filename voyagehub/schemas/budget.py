from typing import List, Literal, Optional
import datetime as dt

from pydantic import Field, field_validator

from voyagehub.schemas.base import CamelModel, Money, MoneyInput, PatchModel, clean_text, normalize_currency


class BudgetCategory(CamelModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    allocated: MoneyInput = Field(default=0, ge=0)
    # Client-side running figure; the authoritative value comes from the summary
    spent: MoneyInput = Field(default=0, ge=0)
    color: Optional[str] = None


class BudgetUpdate(PatchModel):
    total_budget: Optional[MoneyInput] = Field(default=None, ge=0)
    currency: Optional[str] = None
    categories: Optional[List[BudgetCategory]] = None

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, value: Optional[str]) -> Optional[str]:
        return normalize_currency(value)

    @field_validator("categories")
    @classmethod
    def unique_category_ids(cls, value):
        if value is None:
            return value
        ids = [c.id for c in value]
        if len(ids) != len(set(ids)):
            raise ValueError("category ids must be unique")
        return value


class ExpenseCreate(CamelModel):
    title: str = Field(min_length=1)
    amount: MoneyInput = Field(gt=0)
    date: dt.date
    category_id: Optional[str] = None
    currency: str = "USD"
    receipt: Optional[str] = None
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        return clean_text(value)

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, value: str) -> str:
        return normalize_currency(value)


class ExpenseUpdate(PatchModel):
    title: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[MoneyInput] = Field(default=None, gt=0)
    date: Optional[dt.date] = None
    category_id: Optional[str] = None
    currency: Optional[str] = None
    receipt: Optional[str] = None
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: Optional[str]) -> Optional[str]:
        return clean_text(value)

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, value: Optional[str]) -> Optional[str]:
        return normalize_currency(value)


class ExpenseResponse(CamelModel):
    id: str
    budget_id: str
    category_id: Optional[str] = None
    title: str
    amount: Money
    currency: str
    date: dt.date
    receipt: Optional[str] = None
    description: Optional[str] = None
    created_at: dt.datetime


class CategorySummaryResponse(CamelModel):
    id: str
    name: str
    allocated: Money
    spent: Money
    remaining: Money
    utilization_percent: Optional[Money] = None


class BudgetSummaryResponse(CamelModel):
    total_budget: Money
    total_spent: Money
    remaining: Money
    utilization_percent: Optional[Money] = None
    alert_level: Literal["ok", "warning", "over-budget"]
    total_allocated: Money
    unallocated: Money
    over_allocated: bool
    uncategorized_spent: Money
    categories: List[CategorySummaryResponse]


class BudgetResponse(CamelModel):
    id: str
    vacation_id: str
    total_budget: Money
    currency: str
    categories: List[BudgetCategory]
    expenses: List[ExpenseResponse] = Field(default_factory=list)
    summary: Optional[BudgetSummaryResponse] = None
    created_at: dt.datetime
    updated_at: dt.datetime
