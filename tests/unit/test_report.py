"""Unit tests for report assembly"""

from datetime import datetime, timezone

import pytest
from redflag.domain.exceptions import MissingInputError
from redflag.domain.expenses import SeverityThresholds
from redflag.domain.report import build_report, report_to_dict

GENERATED_AT = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def test_build_report(sample_ledger, sample_bank, sample_customers):
    report = build_report(
        "scan-1",
        "Acme Distribution LLC",
        sample_ledger,
        sample_bank,
        sample_customers,
        reported_net_income=185000,
        other_adjustments=15000,
        generated_at=GENERATED_AT,
    )

    assert report.scan_id == "scan-1"
    assert report.company_name == "Acme Distribution LLC"
    assert report.revenue_analysis.flagged_months == ["Dec 2024"]
    assert [e.vendor for e in report.personal_expenses] == ["Walt Disney World"]
    assert report.customer_churn.at_risk_customers == ["Big Box Retail Co"]
    assert report.customer_churn.top_customer == "Big Box Retail Co"
    assert report.customer_churn.top_customer_percentage == 35.7
    # 40 revenue + 2 amount + 2.5 severity + 10 churn
    assert report.risk_score == 55
    assert report.risk_level == "medium"
    assert report.ebitda_bridge.true_adjusted_ebitda == 205000
    assert [f.row_number for f in report.forensic_findings] == [1, 2, 3, 4]
    assert report.forensic_findings[1].level == "danger"
    assert report.dataset_stats.count == 5
    assert report.dataset_stats.total_amount == pytest.approx(272240.75)
    assert report.generated_at == GENERATED_AT


def test_build_report_derives_net_income(sample_ledger, sample_bank, sample_customers):
    report = build_report("scan-2", "Acme", sample_ledger, sample_bank, sample_customers)

    # 255,000 revenue - 17,240.75 expenses
    assert report.ebitda_bridge.reported_net_income == pytest.approx(237759.25)
    assert report.ebitda_bridge.other_adjustments == 0
    assert report.generated_at.tzinfo is not None


def test_build_report_engine_options(sample_ledger, sample_bank, sample_customers):
    report = build_report(
        "scan-3",
        "Acme",
        sample_ledger,
        sample_bank,
        sample_customers,
        threshold_percent=200,
        severity_thresholds=SeverityThresholds(high=10, medium=5),
        concentration_threshold=40,
    )

    assert report.revenue_analysis.flagged_months == []
    assert report.personal_expenses[0].severity == "low"
    assert report.customer_churn.concentration_risk is False


def test_build_report_empty_inputs():
    report = build_report("scan-4", "Empty Co", [], [], [])

    assert report.risk_score == 0
    assert report.risk_level == "low"
    assert report.personal_expenses == []
    assert report.forensic_findings == []
    assert report.ebitda_bridge.true_adjusted_ebitda == 0
    assert report.dataset_stats.count == 0
    assert report.dataset_stats.average_amount == 0.0


def test_build_report_missing_input(sample_ledger, sample_bank):
    with pytest.raises(MissingInputError, match="customers"):
        build_report("scan-5", "Acme", sample_ledger, sample_bank, None)


def test_report_to_dict(sample_ledger, sample_bank, sample_customers):
    report = build_report(
        "scan-6", "Acme", sample_ledger, sample_bank, sample_customers, generated_at=GENERATED_AT
    )

    data = report_to_dict(report)

    assert data["generated_at"] == "2025-01-15T12:00:00+00:00"
    assert data["revenue_analysis"]["monthly_data"][1]["month"] == "Dec 2024"
    assert data["personal_expenses"][0]["severity"] == "high"
    assert data["customer_churn"]["churn_details"][0]["trend"] == "down"
