"""Risk scoring engine - combines the analyses into a 0-100 score and a risk level"""

from typing import List, Optional

from redflag.domain.models import ChurnAnalysis, PersonalExpense, RevenueAnalysis
from redflag.utils.numbers import round_half_up

# Per-factor caps
REVENUE_MAX_POINTS = 40
PERSONAL_AMOUNT_MAX_POINTS = 20
HIGH_SEVERITY_MAX_POINTS = 10
CHURN_MAX_POINTS = 30

REVENUE_POINTS_PER_PERCENT = 0.4
PERSONAL_AMOUNT_BASELINE = 50_000  # add-backs at or above this take the full 20 points
HIGH_SEVERITY_POINTS = 2.5
CHURN_POINTS_PER_CUSTOMER = 10

HIGH_RISK_SCORE = 70
MEDIUM_RISK_SCORE = 40


def revenue_points(revenue_analysis: Optional[RevenueAnalysis]) -> float:
    if revenue_analysis is None:
        return 0.0
    flagged = [m for m in revenue_analysis.monthly_data if m.flagged]
    if not flagged:
        return 0.0
    max_discrepancy = max(abs(m.discrepancy_percentage) for m in flagged)
    return min(REVENUE_MAX_POINTS, max_discrepancy * REVENUE_POINTS_PER_PERCENT)


def personal_expense_points(personal_expenses: Optional[List[PersonalExpense]]) -> float:
    if not personal_expenses:
        return 0.0
    total = sum(e.amount for e in personal_expenses)
    high_count = sum(1 for e in personal_expenses if e.severity == "high")
    amount_score = min(PERSONAL_AMOUNT_MAX_POINTS, total / PERSONAL_AMOUNT_BASELINE * PERSONAL_AMOUNT_MAX_POINTS)
    severity_score = min(HIGH_SEVERITY_MAX_POINTS, high_count * HIGH_SEVERITY_POINTS)
    return amount_score + severity_score


def churn_points(customer_churn: Optional[ChurnAnalysis]) -> float:
    if customer_churn is None:
        return 0.0
    return min(CHURN_MAX_POINTS, len(customer_churn.at_risk_customers) * CHURN_POINTS_PER_CUSTOMER)


def generate_risk_score(
    revenue_analysis: Optional[RevenueAnalysis] = None,
    personal_expenses: Optional[List[PersonalExpense]] = None,
    customer_churn: Optional[ChurnAnalysis] = None,
) -> int:
    """
    Calculate risk score from 0 (clean) to 100 (highest risk).

    Scoring weights:
    - up to 40: largest flagged monthly revenue discrepancy x 0.4
    - up to 20: personal add-back total relative to $50k
    - up to 10: 2.5 per high-severity personal expense
    - up to 30: 10 per at-risk customer

    A section that is absent contributes nothing.
    """
    score = (
        revenue_points(revenue_analysis)
        + personal_expense_points(personal_expenses)
        + churn_points(customer_churn)
    )
    return int(max(0, min(100, round_half_up(score, 0))))


def get_risk_level(score: int) -> str:
    """
    Map score to risk level.

    Bands:
    - 70+:   high
    - 40-69: medium
    - <40:   low
    """
    if score >= HIGH_RISK_SCORE:
        return "high"
    elif score >= MEDIUM_RISK_SCORE:
        return "medium"
    else:
        return "low"
