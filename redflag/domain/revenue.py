"""Revenue reconciliation - booked ledger revenue vs actual bank deposits (proof of cash)"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from redflag.domain.exceptions import require_collection
from redflag.domain.models import BankTransaction, LedgerEntry, MonthlyRevenue, RevenueAnalysis
from redflag.utils.date_utils import format_month, is_valid_date, month_key
from redflag.utils.numbers import percentage_change, round_currency, round_half_up

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD_PERCENT = 10.0

# Proof-of-cash: total variance above this share of booked revenue is a finding
TOTAL_VARIANCE_RATIO = 0.05

# Month-over-month jump rule
REVENUE_JUMP_PERCENT = 50.0
DEPOSIT_GROWTH_CEILING_PERCENT = 20.0


def _sum_by_month(records: Iterable, wanted_type: str) -> Dict[str, float]:
    totals: Dict[str, float] = defaultdict(float)
    for record in records:
        if record.type != wanted_type or record.amount <= 0:
            continue
        if not is_valid_date(record.date):
            logger.debug("Skipping %s record with invalid date %r", wanted_type, record.date)
            continue
        totals[month_key(record.date)] += record.amount
    return totals


def _is_revenue_jump(
    booked: int,
    deposits: int,
    prior_booked: Optional[int],
    prior_deposits: Optional[int],
) -> bool:
    """
    Booked revenue up more than 50% while deposits grew less than 20%.

    Catches revenue pulled forward or smoothed into a month without the
    cash to back it, even when the month sits under the raw threshold.
    """
    if prior_booked is None or prior_booked <= 0 or prior_deposits is None:
        return False

    revenue_growth = (booked - prior_booked) / prior_booked * 100
    if prior_deposits > 0:
        deposit_growth = (deposits - prior_deposits) / prior_deposits * 100
    else:
        # New cash where there was none counts as unlimited growth
        deposit_growth = 0.0 if deposits == 0 else float("inf")

    return revenue_growth > REVENUE_JUMP_PERCENT and deposit_growth < DEPOSIT_GROWTH_CEILING_PERCENT


def analyze_revenue(
    ledger_entries: List[LedgerEntry],
    bank_transactions: List[BankTransaction],
    threshold_percent: float = DEFAULT_THRESHOLD_PERCENT,
    detect_revenue_jumps: bool = False,
) -> RevenueAnalysis:
    """
    Compare monthly booked revenue against monthly bank deposits.

    Requirements:
    - Only positive revenue entries / deposits with a YYYY-MM(-DD) date count
    - One MonthlyRevenue per month present in either input, ascending
    - Sums rounded to whole currency units, percentage to 1 decimal
    - Month flagged when discrepancy_percentage > threshold_percent (strict)
    - Optional jump rule flags months whose booked revenue outruns deposits

    Percentage sentinels: deposits == 0 with booked > 0 → 100, both zero → 0.

    discrepancy_found is True when any month is flagged or total variance
    exceeds 5% of total booked revenue.
    """
    require_collection(ledger_entries, "ledger_entries")
    require_collection(bank_transactions, "bank_transactions")

    revenue_by_month = _sum_by_month(ledger_entries, "revenue")
    deposits_by_month = _sum_by_month(bank_transactions, "deposit")

    months = sorted(set(revenue_by_month) | set(deposits_by_month))

    monthly_data: List[MonthlyRevenue] = []
    flagged_months: List[str] = []
    prior_booked: Optional[int] = None
    prior_deposits: Optional[int] = None

    for key in months:
        booked = round_currency(revenue_by_month.get(key, 0.0))
        deposits = round_currency(deposits_by_month.get(key, 0.0))
        discrepancy = booked - deposits
        pct = round_half_up(percentage_change(discrepancy, deposits), 1)

        flagged = pct > threshold_percent
        if not flagged and detect_revenue_jumps:
            flagged = _is_revenue_jump(booked, deposits, prior_booked, prior_deposits)

        label = format_month(key)
        if flagged:
            flagged_months.append(label)

        monthly_data.append(
            MonthlyRevenue(
                month=label,
                booked_revenue=booked,
                actual_deposits=deposits,
                discrepancy=discrepancy,
                discrepancy_percentage=pct,
                flagged=flagged,
            )
        )
        prior_booked, prior_deposits = booked, deposits

    total_booked = sum(m.booked_revenue for m in monthly_data)
    total_deposits = sum(m.actual_deposits for m in monthly_data)
    total_variance = total_booked - total_deposits

    proof_of_cash_failed = total_booked > 0 and abs(total_variance) > total_booked * TOTAL_VARIANCE_RATIO

    return RevenueAnalysis(
        monthly_data=monthly_data,
        discrepancy_found=bool(flagged_months) or proof_of_cash_failed,
        flagged_months=flagged_months,
        discrepancy_amount=total_variance,
        discrepancy_percentage=round_half_up(percentage_change(total_variance, total_deposits), 1),
    )
