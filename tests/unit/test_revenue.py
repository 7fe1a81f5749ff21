"""Unit tests for revenue reconciliation"""

import pytest
from redflag.domain.exceptions import MissingInputError
from redflag.domain.models import BankTransaction, LedgerEntry
from redflag.domain.revenue import analyze_revenue


def revenue(date: str, amount: float) -> LedgerEntry:
    return LedgerEntry(date, "Product Sales", "Revenue", amount, "revenue")


def deposit(date: str, amount: float) -> BankTransaction:
    return BankTransaction(date, "Customer Payments", amount, "deposit")


def test_analyze_revenue_inflated_month():
    """Booked $175k against $75k deposited"""
    result = analyze_revenue([revenue("2024-12-15", 175000)], [deposit("2024-12-20", 75000)])

    month = result.monthly_data[0]
    assert month.month == "Dec 2024"
    assert month.booked_revenue == 175000
    assert month.actual_deposits == 75000
    assert month.discrepancy == 100000
    assert month.discrepancy_percentage == 133.3
    assert month.flagged is True
    assert result.flagged_months == ["Dec 2024"]
    assert result.discrepancy_found is True


def test_analyze_revenue_zero_deposits():
    """No deposits at all for a month with booked revenue"""
    result = analyze_revenue([revenue("2024-03-01", 1000)], [])

    month = result.monthly_data[0]
    assert month.actual_deposits == 0
    assert month.discrepancy_percentage == 100
    assert month.flagged is True


def test_analyze_revenue_threshold_is_strict():
    """Exactly 10% does not flag, 11% does"""
    at_threshold = analyze_revenue([revenue("2024-01-10", 110)], [deposit("2024-01-12", 100)])
    above = analyze_revenue([revenue("2024-01-10", 111)], [deposit("2024-01-12", 100)])

    assert at_threshold.monthly_data[0].discrepancy_percentage == 10.0
    assert at_threshold.monthly_data[0].flagged is False
    assert above.monthly_data[0].discrepancy_percentage == 11.0
    assert above.monthly_data[0].flagged is True


def test_analyze_revenue_custom_threshold():
    result = analyze_revenue(
        [revenue("2024-01-10", 111)],
        [deposit("2024-01-12", 100)],
        threshold_percent=15,
    )
    assert result.monthly_data[0].flagged is False


def test_analyze_revenue_month_union_sorted():
    """Every month from either side appears once, in chronological order"""
    ledger = [
        revenue("2024-03-05", 500),
        revenue("2024-01-05", 1000),
        revenue("2024-01-20", 250),
    ]
    bank = [
        deposit("2024-02-11", 900),
        deposit("2024-01-30", 1250),
        deposit("2023-12-30", 75),
    ]

    result = analyze_revenue(ledger, bank)

    assert [m.month for m in result.monthly_data] == ["Dec 2023", "Jan 2024", "Feb 2024", "Mar 2024"]
    january = result.monthly_data[1]
    assert january.booked_revenue == 1250
    assert january.actual_deposits == 1250
    assert january.discrepancy_percentage == 0.0


def test_analyze_revenue_deposits_without_revenue():
    result = analyze_revenue([], [deposit("2024-02-11", 900)])

    month = result.monthly_data[0]
    assert month.booked_revenue == 0
    assert month.discrepancy == -900
    assert month.discrepancy_percentage == -100.0
    assert month.flagged is False


def test_analyze_revenue_skips_invalid_and_irrelevant_records():
    """Bad dates, zero amounts, expenses and withdrawals never reach the totals"""
    ledger = [
        revenue("2024-01-10", 1000),
        revenue("01/15/2024", 5000),
        revenue("2024-13-01", 5000),
        revenue("2024-01-11", 0),
        LedgerEntry("2024-01-12", "Rent", "Rent", 700, "expense"),
    ]
    bank = [
        deposit("2024-01-20", 1000),
        deposit("not a date", 9000),
        BankTransaction("2024-01-21", "Rent", 700, "withdrawal"),
    ]

    result = analyze_revenue(ledger, bank)

    assert len(result.monthly_data) == 1
    assert result.monthly_data[0].booked_revenue == 1000
    assert result.monthly_data[0].actual_deposits == 1000


def test_analyze_revenue_accepts_month_only_dates():
    result = analyze_revenue([revenue("2024-06", 1200)], [deposit("2024-06", 1200)])
    assert result.monthly_data[0].month == "Jun 2024"


def test_analyze_revenue_rounds_half_up():
    result = analyze_revenue([revenue("2024-01-10", 100.5)], [deposit("2024-01-10", 99.5)])

    month = result.monthly_data[0]
    assert month.booked_revenue == 101
    assert month.actual_deposits == 100


def test_analyze_revenue_proof_of_cash_total_variance():
    """Months under the threshold can still fail proof of cash in aggregate"""
    ledger = [revenue("2024-01-10", 108), revenue("2024-02-10", 108)]
    bank = [deposit("2024-01-15", 100), deposit("2024-02-15", 100)]

    result = analyze_revenue(ledger, bank)

    assert result.flagged_months == []
    assert result.discrepancy_amount == 16
    assert result.discrepancy_percentage == 8.0
    assert result.discrepancy_found is True


def test_analyze_revenue_clean_books():
    ledger = [revenue("2024-01-10", 1000), revenue("2024-02-10", 1000)]
    bank = [deposit("2024-01-15", 1000), deposit("2024-02-15", 990)]

    result = analyze_revenue(ledger, bank)

    assert result.discrepancy_found is False
    assert result.flagged_months == []


def test_analyze_revenue_jump_rule_is_optional():
    """Revenue more than doubles while deposits barely move"""
    ledger = [revenue("2024-01-10", 50000), revenue("2024-02-10", 110000)]
    bank = [deposit("2024-01-15", 100000), deposit("2024-02-15", 105000)]

    plain = analyze_revenue(ledger, bank)
    with_jumps = analyze_revenue(ledger, bank, detect_revenue_jumps=True)

    assert plain.monthly_data[1].discrepancy_percentage == 4.8
    assert plain.monthly_data[1].flagged is False
    assert with_jumps.monthly_data[1].flagged is True
    assert with_jumps.flagged_months == ["Feb 2024"]


def test_analyze_revenue_jump_rule_ignores_backed_growth():
    ledger = [revenue("2024-01-10", 50000), revenue("2024-02-10", 100000)]
    bank = [deposit("2024-01-15", 50000), deposit("2024-02-15", 100000)]

    result = analyze_revenue(ledger, bank, detect_revenue_jumps=True)

    assert result.flagged_months == []


def test_analyze_revenue_empty_inputs():
    result = analyze_revenue([], [])

    assert result.monthly_data == []
    assert result.discrepancy_found is False
    assert result.discrepancy_amount == 0
    assert result.discrepancy_percentage == 0.0


def test_analyze_revenue_missing_input():
    with pytest.raises(MissingInputError, match="bank_transactions"):
        analyze_revenue([], None)


def test_analyze_revenue_idempotent():
    ledger = [revenue("2024-01-10", 1234.56), revenue("2024-02-10", 999.99)]
    bank = [deposit("2024-01-15", 1000.01)]

    assert analyze_revenue(ledger, bank) == analyze_revenue(ledger, bank)
