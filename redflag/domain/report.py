"""Report assembly - runs every analyzer and packages the QoE report"""

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from redflag.domain.churn import DEFAULT_CONCENTRATION_THRESHOLD, calculate_churn
from redflag.domain.ebitda import compute_adjusted_ebitda, derive_net_income
from redflag.domain.exceptions import require_collection
from redflag.domain.expenses import SeverityThresholds, detect_personal_expenses
from redflag.domain.forensics import calculate_dataset_stats, run_dragnet
from redflag.domain.models import BankTransaction, CustomerData, LedgerEntry, QoEReport
from redflag.domain.revenue import DEFAULT_THRESHOLD_PERCENT, analyze_revenue
from redflag.domain.scoring import generate_risk_score, get_risk_level


def build_report(
    scan_id: str,
    company_name: str,
    ledger_entries: List[LedgerEntry],
    bank_transactions: List[BankTransaction],
    customers: List[CustomerData],
    reported_net_income: Optional[float] = None,
    other_adjustments: float = 0,
    threshold_percent: float = DEFAULT_THRESHOLD_PERCENT,
    detect_revenue_jumps: bool = False,
    severity_thresholds: Optional[SeverityThresholds] = None,
    concentration_threshold: float = DEFAULT_CONCENTRATION_THRESHOLD,
    generated_at: Optional[datetime] = None,
) -> QoEReport:
    """
    Main entry point: analyze ledger, bank and customer data and build the report.

    Flow:
    1. Revenue reconciliation, personal expenses, churn (independent)
    2. Risk score from the three analyses
    3. EBITDA bridge from personal expenses and net income
    4. Forensic dragnet feed and dataset stats over the raw ledger

    reported_net_income defaults to booked revenue minus booked expenses.
    """
    require_collection(ledger_entries, "ledger_entries")
    require_collection(bank_transactions, "bank_transactions")
    require_collection(customers, "customers")

    revenue_analysis = analyze_revenue(
        ledger_entries,
        bank_transactions,
        threshold_percent=threshold_percent,
        detect_revenue_jumps=detect_revenue_jumps,
    )
    personal_expenses = detect_personal_expenses(ledger_entries, thresholds=severity_thresholds)
    customer_churn = calculate_churn(customers, concentration_threshold=concentration_threshold)

    risk_score = generate_risk_score(
        revenue_analysis=revenue_analysis,
        personal_expenses=personal_expenses,
        customer_churn=customer_churn,
    )

    if reported_net_income is None:
        reported_net_income = derive_net_income(ledger_entries)
    ebitda_bridge = compute_adjusted_ebitda(reported_net_income, personal_expenses, other_adjustments)

    return QoEReport(
        scan_id=scan_id,
        company_name=company_name,
        risk_score=risk_score,
        risk_level=get_risk_level(risk_score),
        revenue_analysis=revenue_analysis,
        customer_churn=customer_churn,
        personal_expenses=personal_expenses,
        ebitda_bridge=ebitda_bridge,
        forensic_findings=run_dragnet(ledger_entries),
        dataset_stats=calculate_dataset_stats(ledger_entries),
        generated_at=generated_at or datetime.now(timezone.utc),
    )


def report_to_dict(report: QoEReport) -> Dict[str, Any]:
    """JSON-serialisable form of a report"""
    data = asdict(report)
    data["generated_at"] = report.generated_at.isoformat()
    return data
