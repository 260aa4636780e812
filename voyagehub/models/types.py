import uuid
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

TWO_PLACES = Decimal("0.01")


def new_id() -> str:
    return str(uuid.uuid4())


def to_money(value) -> Decimal:
    """Parse a number or numeric string into a Decimal rounded to cents."""
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    else:
        amount = Decimal(str(value))
    return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class DecimalText(TypeDecorator):
    """
    Fixed-point money amount persisted as text ("350.00").

    SQLite has no exact decimal storage; keeping the canonical string avoids
    float drift. Values come back as ``Decimal``.
    """

    impl = String(32)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return format(to_money(value), "f")

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return to_money(value)
