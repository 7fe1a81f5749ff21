"""Unit tests for customer churn and concentration analysis"""

import pytest
from redflag.domain.churn import calculate_churn, calculated_change, is_at_risk
from redflag.domain.exceptions import MissingInputError
from redflag.domain.models import CustomerData


def customer(name: str, m1: float, m2: float, m3: float, pct: float = 0.0, flagged: bool = False) -> CustomerData:
    return CustomerData(name, m1, m2, m3, "stable", pct, flagged)


def test_calculate_churn_severe_drop():
    """45k → 18k is a 60% drop"""
    big_box = customer("Big Box Retail Co", 45000, 42000, 18000)

    result = calculate_churn([big_box])

    assert calculated_change(big_box) == pytest.approx(-60)
    assert result.at_risk_customers == ["Big Box Retail Co"]
    assert result.churn_risk is True
    assert result.churn_details[0].percent_change == -60.0
    assert result.churn_details[0].trend == "down"


def test_full_exit_always_at_risk():
    """Spend going to zero is churn regardless of supplied metadata"""
    exited = customer("Gone Co", 1000, 500, 0, pct=25, flagged=False)

    assert is_at_risk(exited) is True


def test_supplied_flag_and_percentage():
    flagged = customer("Flagged Co", 1000, 1000, 1000, flagged=True)
    supplied_drop = customer("Reported Drop Co", 1000, 1000, 1000, pct=-55)

    result = calculate_churn([flagged, supplied_drop])

    assert result.at_risk_customers == ["Flagged Co", "Reported Drop Co"]


def test_steady_decline_over_30_percent():
    steady = customer("Slipping Co", 1000, 800, 650)
    mild = customer("Mild Co", 1000, 900, 800)
    bumpy = customer("Bumpy Co", 1000, 1100, 600)

    result = calculate_churn([steady, mild, bumpy])

    assert result.at_risk_customers == ["Slipping Co"]


def test_zero_first_month():
    new_customer = customer("New Co", 0, 500, 1500)

    result = calculate_churn([new_customer])

    assert calculated_change(new_customer) == 0.0
    assert result.churn_details[0].trend == "stable"
    assert result.churn_risk is False


def test_trend_recomputed_from_spend():
    result = calculate_churn([
        customer("Up Co", 1000, 1050, 1100),
        customer("Flat Co", 1000, 990, 1040),
        customer("Down Co", 1000, 980, 900),
    ])

    assert [d.trend for d in result.churn_details] == ["up", "stable", "down"]


def test_concentration_risk():
    result = calculate_churn([
        customer("Anchor Co", 50000, 50000, 50000),
        customer("Small A", 10000, 10000, 10000),
        customer("Small B", 10000, 10000, 10000),
    ])

    assert result.top_customer == "Anchor Co"
    assert result.top_customer_percentage == 71.4
    assert result.concentration_risk is True


def test_concentration_boundary_not_flagged():
    """Five equal customers hold exactly 20% each"""
    result = calculate_churn([customer(f"Customer {i}", 100, 100, 100) for i in range(5)])

    assert result.top_customer_percentage == 20.0
    assert result.concentration_risk is False


def test_concentration_compares_unrounded_share():
    """20.04% is reported as 20.0 but still exceeds the 20% cut-off"""
    anchor = customer("Anchor Co", 668, 668, 668)
    others = [customer(f"Small {i}", 666, 666, 667) for i in range(4)]

    result = calculate_churn([anchor, *others])

    assert result.top_customer == "Anchor Co"
    assert result.top_customer_percentage == 20.0
    assert result.concentration_risk is True


def test_calculate_churn_empty():
    result = calculate_churn([])

    assert result.churn_risk is False
    assert result.at_risk_customers == []
    assert result.concentration_risk is False
    assert result.top_customer_percentage == 0.0
    assert result.top_customer is None


def test_calculate_churn_missing_input():
    with pytest.raises(MissingInputError, match="customers"):
        calculate_churn(None)
