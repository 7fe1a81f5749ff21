"""EBITDA bridge - reported net income plus owner add-backs"""

from typing import List

from redflag.domain.exceptions import require_collection
from redflag.domain.models import EBITDABridge, LedgerEntry, PersonalExpense


def compute_adjusted_ebitda(
    reported_net_income: float,
    personal_expenses: List[PersonalExpense],
    other_adjustments: float = 0,
) -> EBITDABridge:
    """Add personal-expense and other add-backs to reported net income"""
    require_collection(personal_expenses, "personal_expenses")

    add_back = sum(expense.amount for expense in personal_expenses)

    return EBITDABridge(
        reported_net_income=reported_net_income,
        personal_expense_add_back=add_back,
        other_adjustments=other_adjustments,
        true_adjusted_ebitda=reported_net_income + add_back + other_adjustments,
    )


def derive_net_income(ledger_entries: List[LedgerEntry]) -> float:
    """Booked revenue minus booked expenses, for callers without a reported figure"""
    require_collection(ledger_entries, "ledger_entries")

    revenue = sum(e.amount for e in ledger_entries if e.type == "revenue")
    expenses = sum(e.amount for e in ledger_entries if e.type == "expense")
    return revenue - expenses
