"""Unit tests for personal expense detection"""

import pytest
from redflag.domain.exceptions import MissingInputError
from redflag.domain.expenses import (
    SEVERITY_RANK,
    SeverityThresholds,
    detect_personal_expenses,
    expense_id,
    score_expense_signals,
)
from redflag.domain.models import LedgerEntry


def expense(date: str, description: str, category: str, amount: float) -> LedgerEntry:
    return LedgerEntry(date, description, category, amount, "expense")


def test_detect_disney_booked_as_office_supplies():
    """Keyword plus category mismatch is high severity"""
    result = detect_personal_expenses([expense("2024-11-15", "Walt Disney World", "Office Supplies", 5000)])

    assert len(result) == 1
    flagged = result[0]
    assert flagged.severity == "high"
    assert flagged.vendor == "Walt Disney World"
    assert flagged.amount == 5000
    assert flagged.category == "Office Supplies"
    assert 'Keyword: "disney"' in flagged.flag_reason
    assert 'Category mismatch: "disney"' in flagged.flag_reason
    assert " | " in flagged.flag_reason


def test_detect_luxury_vendor():
    """Ritz-Carlton spa charge trips keyword, mismatch and luxury signals"""
    result = detect_personal_expenses([expense("2024-09-10", "Ritz Carlton Spa", "Employee Wellness", 850)])

    assert result[0].severity == "high"
    assert "Luxury vendor: Ritz-Carlton" in result[0].flag_reason


def test_detect_luxury_vendor_alone():
    low = detect_personal_expenses([expense("2024-09-10", "Dinner at Nobu", "Meals", 400)])
    medium = detect_personal_expenses([expense("2024-09-10", "Dinner at Nobu", "Meals", 1200)])

    assert low[0].severity == "low"
    assert low[0].flag_reason == "Luxury vendor: Nobu"
    assert medium[0].severity == "medium"


def test_detect_weekend_only_above_500():
    """Weekend charges alone are flagged only when over $500"""
    saturday_small = expense("2024-08-03", "Office Depot", "Office Supplies", 500)
    saturday_large = expense("2024-08-03", "Office Depot", "Office Supplies", 600)

    assert detect_personal_expenses([saturday_small]) == []

    result = detect_personal_expenses([saturday_large])
    assert len(result) == 1
    assert result[0].severity == "low"
    assert result[0].flag_reason == "Weekend transaction (Saturday) over $500"


def test_detect_ignores_business_expenses_and_revenue():
    entries = [
        expense("2024-08-05", "Warehouse Lease", "Rent", 12000),
        expense("2024-08-06", "Staples", "Office Supplies", 240),
        LedgerEntry("2024-08-07", "Resort booking commission", "Revenue", 9000, "revenue"),
        expense("2024-08-07", "Family Vacation Resort", "Team Building", 0),
    ]

    assert detect_personal_expenses(entries) == []


def test_detect_keyword_requires_whole_word():
    """"spa" must not match "Spanish", "ski" must not match "Skillshare" """
    entries = [
        expense("2024-08-06", "Spanish translation services", "Professional Fees", 300),
        expense("2024-08-06", "Skillshare subscription", "Training & Education", 120),
    ]

    assert detect_personal_expenses(entries) == []


def test_detect_keyword_points_are_capped():
    """Four keyword hits score the same as three"""
    assert score_expense_signals(0, 4, False, False, False) == 1.5
    assert score_expense_signals(0, 3, False, False, False) == 1.5


def test_detect_sorted_by_severity_then_amount():
    entries = [
        expense("2024-11-15", "Walt Disney World", "Office Supplies", 3500),
        expense("2024-11-14", "Golf balls", "Marketing", 900),
        expense("2024-08-05", "Private School Tuition", "Training & Education", 12500),
    ]

    result = detect_personal_expenses(entries)

    assert [e.vendor for e in result] == ["Private School Tuition", "Walt Disney World", "Golf balls"]
    assert [e.severity for e in result] == ["high", "high", "low"]


def test_detect_suppresses_duplicates():
    """Exact repeats of date + description + amount are reported once"""
    entry = expense("2024-10-22", "Porsche Leasing", "Vehicle Expenses", 2000)

    result = detect_personal_expenses([entry, entry, expense("2024-10-22", "Porsche Leasing", "Auto", 2000)])

    assert len(result) == 1


def test_detect_stable_ids():
    entries = [
        expense("2024-10-22", "Porsche Leasing", "Vehicle Expenses", 2000),
        expense("2024-07-18", "Family Vacation Resort", "Team Building", 3200),
    ]

    first = detect_personal_expenses(entries)
    second = detect_personal_expenses(list(entries))

    assert first == second
    assert {e.id for e in first} == {expense_id(e) for e in entries}
    assert all(e.id.startswith("exp_") for e in first)
    assert expense_id(entries[0]) == expense_id(expense("2024-10-22", "Porsche Leasing", "Other", 2000.0))


def test_severity_never_drops_as_amount_grows():
    amounts = [100, 501, 600, 1500, 3500, 6000, 12000, 50000]
    ranks = []
    for amount in amounts:
        result = detect_personal_expenses([expense("2024-08-03", "Resort stay", "Travel", amount)])
        ranks.append(SEVERITY_RANK[result[0].severity])

    assert ranks == sorted(ranks)
    assert ranks[0] == SEVERITY_RANK["low"]
    assert ranks[-1] == SEVERITY_RANK["high"]


def test_custom_thresholds_and_keywords():
    entry = expense("2024-08-06", "Jet ski rental", "Marketing", 1200)

    default = detect_personal_expenses([entry])
    strict = detect_personal_expenses([entry], thresholds=SeverityThresholds(high=1.0, medium=0.5))
    no_keywords = detect_personal_expenses([entry], keywords=[])

    assert default[0].severity == "medium"
    assert strict[0].severity == "high"
    assert no_keywords == []


def test_detect_missing_input():
    with pytest.raises(MissingInputError, match="ledger_entries"):
        detect_personal_expenses(None)
