"""
Budget Aggregator
Derives spent, remaining and utilization figures from a budget's category
allocations and its expenses. Pure read-side computation: nothing here
touches the database and nothing is persisted.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence

from voyagehub.models.types import to_money

ZERO = Decimal("0.00")
HUNDRED = Decimal("100")

ALERT_OK = "ok"
ALERT_WARNING = "warning"
ALERT_OVER_BUDGET = "over-budget"

DEFAULT_WARNING_PERCENT = Decimal("75")


@dataclass(frozen=True)
class CategoryAllocation:
    id: str
    name: str
    allocated: Decimal


@dataclass(frozen=True)
class ExpenseEntry:
    amount: Decimal
    category_id: Optional[str] = None


@dataclass(frozen=True)
class CategorySummary:
    id: str
    name: str
    allocated: Decimal
    spent: Decimal
    remaining: Decimal
    utilization_percent: Optional[Decimal]


@dataclass(frozen=True)
class BudgetSummary:
    total_budget: Decimal
    total_spent: Decimal
    remaining: Decimal
    utilization_percent: Optional[Decimal]
    alert_level: str
    total_allocated: Decimal
    unallocated: Decimal
    over_allocated: bool
    uncategorized_spent: Decimal
    categories: List[CategorySummary] = field(default_factory=list)


def category_spent(expenses: Iterable[ExpenseEntry], category_id: str) -> Decimal:
    """Sum of expense amounts assigned to ``category_id`` (0 when none match)."""
    return sum(
        (to_money(e.amount) for e in expenses if e.category_id == category_id),
        ZERO,
    )


def total_spent(expenses: Iterable[ExpenseEntry]) -> Decimal:
    """Sum over every expense, whether or not its category is known."""
    return sum((to_money(e.amount) for e in expenses), ZERO)


def remaining(total_budget: Decimal, expenses: Iterable[ExpenseEntry]) -> Decimal:
    """Budget left to spend. Negative once the budget is overrun."""
    return to_money(total_budget) - total_spent(expenses)


def utilization_percent(spent: Decimal, allocated: Decimal) -> Optional[Decimal]:
    """
    ``spent / allocated * 100``, or None when nothing is allocated.

    Never divides by zero and never returns NaN.
    """
    allocated = to_money(allocated)
    if allocated <= 0:
        return None
    return to_money(to_money(spent) / allocated * HUNDRED)


def alert_level(
    overall_percent: Optional[Decimal],
    warning_percent: Decimal = DEFAULT_WARNING_PERCENT,
) -> str:
    """
    Presentation-tier classification of overall budget use.

    ``over-budget`` above 100%, ``warning`` from ``warning_percent`` up,
    otherwise ``ok``. A budget with no total has nothing to warn about.
    """
    if overall_percent is None:
        return ALERT_OK
    if overall_percent > HUNDRED:
        return ALERT_OVER_BUDGET
    if overall_percent >= warning_percent:
        return ALERT_WARNING
    return ALERT_OK


def summarize_budget(
    total_budget: Decimal,
    categories: Sequence[CategoryAllocation],
    expenses: Sequence[ExpenseEntry],
    warning_percent: Decimal = DEFAULT_WARNING_PERCENT,
) -> BudgetSummary:
    """
    Compute every derived figure for one budget snapshot.

    Idempotent: the same inputs always yield an equal summary, regardless of
    expense order.
    """
    total_budget = to_money(total_budget)
    spent_total = total_spent(expenses)

    category_rows = []
    known_ids = set()
    for category in categories:
        known_ids.add(category.id)
        spent = category_spent(expenses, category.id)
        allocated = to_money(category.allocated)
        category_rows.append(
            CategorySummary(
                id=category.id,
                name=category.name,
                allocated=allocated,
                spent=spent,
                remaining=allocated - spent,
                utilization_percent=utilization_percent(spent, allocated),
            )
        )

    uncategorized = sum(
        (to_money(e.amount) for e in expenses if e.category_id not in known_ids),
        ZERO,
    )
    total_allocated = sum((row.allocated for row in category_rows), ZERO)
    overall = utilization_percent(spent_total, total_budget)

    return BudgetSummary(
        total_budget=total_budget,
        total_spent=spent_total,
        remaining=total_budget - spent_total,
        utilization_percent=overall,
        alert_level=alert_level(overall, Decimal(warning_percent)),
        total_allocated=total_allocated,
        unallocated=total_budget - total_allocated,
        over_allocated=total_allocated > total_budget,
        uncategorized_spent=uncategorized,
        categories=category_rows,
    )


def allocations_from_json(raw_categories: Optional[List[Dict[str, Any]]]) -> List[CategoryAllocation]:
    """Build allocations from the budget row's stored category list."""
    allocations = []
    for raw in raw_categories or []:
        allocations.append(
            CategoryAllocation(
                id=str(raw.get("id")),
                name=str(raw.get("name", "")),
                allocated=to_money(raw.get("allocated") or 0),
            )
        )
    return allocations


def entries_from_expenses(expenses) -> List[ExpenseEntry]:
    """Adapt Expense rows (or anything with amount/category_id) to entries."""
    return [ExpenseEntry(amount=to_money(e.amount), category_id=e.category_id) for e in expenses]
