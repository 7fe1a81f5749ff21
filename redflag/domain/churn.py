"""Customer churn and concentration analysis"""

from typing import List

from redflag.domain.exceptions import require_collection
from redflag.domain.models import ChurnAnalysis, ChurnDetail, CustomerData
from redflag.utils.numbers import round_half_up

SEVERE_DECLINE_PERCENT = -50.0
STEADY_DECLINE_PERCENT = -30.0
TREND_BAND_PERCENT = 5.0
DEFAULT_CONCENTRATION_THRESHOLD = 20.0


def calculated_change(customer: CustomerData) -> float:
    """month1 → month3 spend change in percent, 0 when month1 is zero"""
    if customer.month1_spend == 0:
        return 0.0
    return (customer.month3_spend - customer.month1_spend) / customer.month1_spend * 100


def spend_trend(change: float) -> str:
    if change > TREND_BAND_PERCENT:
        return "up"
    if change < -TREND_BAND_PERCENT:
        return "down"
    return "stable"


def is_at_risk(customer: CustomerData) -> bool:
    """
    A customer is at risk when any of these hold:
    - calculated or supplied change below -50%
    - supplied flag set
    - spend fell every month and is down more than 30%
    - spend went to zero from a non-zero start (full exit)
    """
    change = calculated_change(customer)
    steady_decline = customer.month1_spend > customer.month2_spend > customer.month3_spend

    return (
        change < SEVERE_DECLINE_PERCENT
        or customer.percentage_change < SEVERE_DECLINE_PERCENT
        or customer.flagged
        or (steady_decline and change < STEADY_DECLINE_PERCENT)
        or (customer.month3_spend == 0 and customer.month1_spend > 0)
    )


def calculate_churn(
    customers: List[CustomerData],
    concentration_threshold: float = DEFAULT_CONCENTRATION_THRESHOLD,
) -> ChurnAnalysis:
    """
    Evaluate 3-month spend trajectories for churn and concentration risk.

    concentration_risk is True when the largest customer's share of total
    3-month spend exceeds concentration_threshold percent.
    """
    require_collection(customers, "customers")

    at_risk: List[str] = []
    details: List[ChurnDetail] = []

    for customer in customers:
        change = calculated_change(customer)
        details.append(
            ChurnDetail(
                name=customer.name,
                percent_change=round_half_up(change, 1),
                trend=spend_trend(change),
            )
        )
        if is_at_risk(customer):
            at_risk.append(customer.name)

    totals = [
        (c.name, c.month1_spend + c.month2_spend + c.month3_spend)
        for c in customers
    ]
    grand_total = sum(total for _, total in totals)

    top_customer = None
    top_share = 0.0
    if grand_total > 0:
        top_customer, top_total = max(totals, key=lambda item: item[1])
        top_share = top_total * 100 / grand_total

    return ChurnAnalysis(
        churn_risk=bool(at_risk),
        at_risk_customers=at_risk,
        churn_details=details,
        concentration_risk=top_share > concentration_threshold,
        top_customer_percentage=round_half_up(top_share, 1),
        top_customer=top_customer,
        customers=list(customers),
    )
