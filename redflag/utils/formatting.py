"""Display formatting for report values"""

from redflag.utils.numbers import round_currency, round_half_up


def format_currency(amount: float) -> str:
    """USD with thousands separators and no decimals: 1234.4 → "$1,234", -50 → "-$50" """
    whole = round_currency(amount)
    sign = "-" if whole < 0 else ""
    return f"{sign}${abs(whole):,}"


def format_percentage(value: float) -> str:
    """Signed percentage with one decimal: 12.5 → "+12.5%", -3 → "-3.0%" """
    rounded = round_half_up(value, 1)
    sign = "+" if rounded >= 0 else ""
    return f"{sign}{rounded:.1f}%"


def risk_color(level: str) -> str:
    """CSS token used by the report view for a risk level"""
    return f"risk-{level}"
