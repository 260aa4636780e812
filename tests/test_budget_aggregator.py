from decimal import Decimal

from voyagehub.services.budget_aggregator import (
    ALERT_OK,
    ALERT_OVER_BUDGET,
    ALERT_WARNING,
    CategoryAllocation,
    ExpenseEntry,
    alert_level,
    allocations_from_json,
    category_spent,
    remaining,
    summarize_budget,
    total_spent,
    utilization_percent,
)

FOOD = CategoryAllocation(id="c1", name="Food", allocated=Decimal("400"))
EXPENSES = [
    ExpenseEntry(amount=Decimal("350"), category_id="c1"),
    ExpenseEntry(amount=Decimal("100"), category_id="c2"),
]


def test_summary_matches_hand_computed_figures() -> None:
    summary = summarize_budget(Decimal("1000"), [FOOD], EXPENSES)

    assert summary.total_spent == Decimal("450.00")
    assert summary.remaining == Decimal("550.00")
    assert summary.utilization_percent == Decimal("45.00")
    assert summary.alert_level == ALERT_OK

    food = summary.categories[0]
    assert food.spent == Decimal("350.00")
    assert food.remaining == Decimal("50.00")
    assert food.utilization_percent == Decimal("87.50")

    # c2 is not an allocated category
    assert summary.uncategorized_spent == Decimal("100.00")
    assert summary.unallocated == Decimal("600.00")
    assert summary.over_allocated is False


def test_category_spent_is_zero_without_matching_expenses() -> None:
    assert category_spent(EXPENSES, "c9") == Decimal("0.00")
    assert category_spent([], "c1") == Decimal("0.00")


def test_total_spent_counts_every_expense() -> None:
    assert total_spent(EXPENSES) == sum(e.amount for e in EXPENSES)
    assert total_spent([]) == Decimal("0.00")


def test_remaining_goes_negative_when_overrun() -> None:
    assert remaining(Decimal("400"), EXPENSES) == Decimal("-50.00")


def test_utilization_is_none_when_nothing_allocated() -> None:
    assert utilization_percent(Decimal("10"), Decimal("0")) is None
    assert utilization_percent(Decimal("0"), Decimal("0")) is None


def test_alert_levels() -> None:
    assert alert_level(None) == ALERT_OK
    assert alert_level(Decimal("74.99")) == ALERT_OK
    assert alert_level(Decimal("75")) == ALERT_WARNING
    assert alert_level(Decimal("100")) == ALERT_WARNING
    assert alert_level(Decimal("100.01")) == ALERT_OVER_BUDGET
    assert alert_level(Decimal("50"), warning_percent=Decimal("50")) == ALERT_WARNING


def test_summary_is_independent_of_expense_order() -> None:
    forward = summarize_budget(Decimal("1000"), [FOOD], EXPENSES)
    backward = summarize_budget(Decimal("1000"), [FOOD], list(reversed(EXPENSES)))
    assert forward == backward


def test_zero_budget_summary_has_no_utilization() -> None:
    summary = summarize_budget(Decimal("0"), [], [ExpenseEntry(amount=Decimal("12.50"))])

    assert summary.utilization_percent is None
    assert summary.alert_level == ALERT_OK
    assert summary.remaining == Decimal("-12.50")
    assert summary.uncategorized_spent == Decimal("12.50")


def test_allocations_exceeding_total_are_reported_not_rejected() -> None:
    categories = [
        CategoryAllocation(id="c1", name="Food", allocated=Decimal("700")),
        CategoryAllocation(id="c2", name="Hotel", allocated=Decimal("500")),
    ]
    summary = summarize_budget(Decimal("1000"), categories, [])

    assert summary.total_allocated == Decimal("1200.00")
    assert summary.unallocated == Decimal("-200.00")
    assert summary.over_allocated is True


def test_allocations_from_stored_json() -> None:
    allocations = allocations_from_json(
        [{"id": "c1", "name": "Food", "allocated": 400.5, "spent": 0}, {"id": "c2", "name": "Fun"}]
    )

    assert allocations[0] == CategoryAllocation(id="c1", name="Food", allocated=Decimal("400.50"))
    assert allocations[1].allocated == Decimal("0.00")
    assert allocations_from_json(None) == []
