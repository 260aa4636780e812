from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


# Decimal internally, plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# Client-supplied amounts: whole cents and small enough for DecimalText
MoneyInput = Annotated[Money, Field(max_digits=14, decimal_places=2)]


def clean_text(value: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace; blank strings are rejected."""
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def normalize_currency(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    code = value.strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValueError("must be 3-letter ISO code")
    return code


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON (the client's field names)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PatchModel(CamelModel):
    """
    Partial update body.

    Only fields that are present and non-null are applied; everything else
    keeps its stored value.
    """

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class MessageResponse(BaseModel):
    message: str
