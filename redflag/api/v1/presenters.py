"""Map stored scans to API responses, with optional redaction for preview viewers"""

import copy
from typing import Any, Dict, Optional

from redflag.api.v1.schemas import ScanResponse, ScanSummary
from redflag.infrastructure.database.models import Scan
from redflag.utils.formatting import format_currency, format_percentage, risk_color

REDACTED = "Redacted"


def redact_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Mask vendor names, amounts and customer names.

    Works on a copy: scores, levels and flags stay visible, stored values
    are never touched.
    """
    data = copy.deepcopy(data)

    for expense in data.get("personal_expenses") or []:
        expense["vendor"] = REDACTED
        expense["amount"] = 0
        expense["flag_reason"] = REDACTED

    churn = data.get("customer_churn")
    if churn:
        aliases = {}
        for detail in churn.get("churn_details", []):
            aliases.setdefault(detail["name"], f"Customer {len(aliases) + 1}")
        for customer in churn.get("customers", []):
            aliases.setdefault(customer["name"], f"Customer {len(aliases) + 1}")

        for detail in churn.get("churn_details", []):
            detail["name"] = aliases[detail["name"]]
        for customer in churn.get("customers", []):
            customer["name"] = aliases[customer["name"]]
        churn["at_risk_customers"] = [aliases.get(name, REDACTED) for name in churn.get("at_risk_customers", [])]
        if churn.get("top_customer"):
            churn["top_customer"] = aliases.get(churn["top_customer"], REDACTED)

    for finding in data.get("forensic_findings") or []:
        finding["description"] = REDACTED
        finding["amount"] = 0
        finding["message"] = f"Row #{finding['row_number']}: Flagged - {', '.join(finding['flags'])}"

    data["redacted"] = True
    return data


def report_summary(data: Dict[str, Any]) -> Optional[Dict[str, str]]:
    """Formatted header values for a report payload; None until the scan has results"""
    revenue = data.get("revenue_analysis")
    bridge = data.get("ebitda_bridge")
    if not (revenue and bridge and data.get("risk_level")):
        return None
    return {
        "risk_badge": risk_color(data["risk_level"]),
        "revenue_variance": format_percentage(revenue["discrepancy_percentage"]),
        "personal_expense_add_back": format_currency(bridge["personal_expense_add_back"]),
        "adjusted_ebitda": format_currency(bridge["true_adjusted_ebitda"]),
    }


def scan_to_response(scan: Scan, skipped_rows: int = 0, redacted: bool = False) -> ScanResponse:
    data = {
        "scan_id": str(scan.id),
        "user_id": scan.user_id,
        "company_name": scan.company_name,
        "industry": scan.industry,
        "asking_price": scan.asking_price,
        "status": scan.status,
        "risk_score": scan.risk_score,
        "risk_level": scan.risk_level,
        "revenue_analysis": scan.revenue_analysis,
        "personal_expenses": scan.personal_expenses,
        "customer_churn": scan.customer_churn,
        "ebitda_bridge": scan.ebitda_bridge,
        "forensic_findings": scan.forensic_findings,
        "dataset_stats": scan.dataset_stats,
        "error_message": scan.error_message,
        "skipped_rows": skipped_rows,
        "created_at": scan.created_at.isoformat(),
        "completed_at": scan.completed_at.isoformat() if scan.completed_at else None,
    }
    data["summary"] = report_summary(data)
    if redacted:
        data = redact_payload(data)
    return ScanResponse(**data)


def scan_to_summary(scan: Scan) -> ScanSummary:
    return ScanSummary(
        scan_id=str(scan.id),
        company_name=scan.company_name,
        status=scan.status,
        risk_score=scan.risk_score,
        risk_level=scan.risk_level,
        created_at=scan.created_at.isoformat(),
    )
