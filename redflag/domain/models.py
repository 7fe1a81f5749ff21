"""Domain models - pure Python dataclasses representing ledger data and QoE findings"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class LedgerEntry:
    """One accounting-book transaction"""

    date: str  # YYYY-MM-DD or YYYY-MM
    description: str
    category: str
    amount: float  # non-negative, sign carried by type
    type: str  # "revenue" or "expense"


@dataclass(frozen=True)
class BankTransaction:
    """One bank-statement line"""

    date: str
    description: str
    amount: float
    type: str  # "deposit" or "withdrawal"


@dataclass(frozen=True)
class CustomerData:
    """Three-month spend trajectory supplied for a single customer"""

    name: str
    month1_spend: float
    month2_spend: float
    month3_spend: float
    trend: str = "stable"  # "up" | "down" | "stable"
    percentage_change: float = 0.0
    flagged: bool = False


@dataclass
class MonthlyRevenue:
    """Booked revenue vs bank deposits for one calendar month"""

    month: str  # display label, e.g. "Dec 2024"
    booked_revenue: int
    actual_deposits: int
    discrepancy: int
    discrepancy_percentage: float
    flagged: bool


@dataclass
class RevenueAnalysis:
    """Proof-of-cash result across all months"""

    monthly_data: List[MonthlyRevenue]
    discrepancy_found: bool
    flagged_months: List[str]
    discrepancy_amount: int = 0
    discrepancy_percentage: float = 0.0


@dataclass
class PersonalExpense:
    """Expense entry judged likely to be personal"""

    id: str
    date: str
    vendor: str
    amount: float
    category: str
    flag_reason: str
    severity: str  # "low" | "medium" | "high"


@dataclass
class ChurnDetail:
    name: str
    percent_change: float
    trend: str


@dataclass
class ChurnAnalysis:
    """Customer churn and concentration findings"""

    churn_risk: bool
    at_risk_customers: List[str]
    churn_details: List[ChurnDetail]
    concentration_risk: bool
    top_customer_percentage: float
    top_customer: Optional[str] = None
    customers: List[CustomerData] = field(default_factory=list)


@dataclass
class EBITDABridge:
    """Reported net income to adjusted EBITDA"""

    reported_net_income: float
    personal_expense_add_back: float
    other_adjustments: float
    true_adjusted_ebitda: float


@dataclass
class DragnetFinding:
    """Row-level hit from the forensic dragnet pass"""

    row_number: int
    description: str
    amount: float
    flags: List[str]
    level: str  # "warning" | "danger"
    message: str


@dataclass
class DatasetStats:
    """Row count and amount totals over the raw ledger"""

    count: int
    total_amount: float
    average_amount: float


@dataclass
class QoEReport:
    """Complete Quality of Earnings report for one scan"""

    scan_id: str
    company_name: str
    risk_score: int
    risk_level: str
    revenue_analysis: RevenueAnalysis
    customer_churn: ChurnAnalysis
    personal_expenses: List[PersonalExpense]
    ebitda_bridge: EBITDABridge
    forensic_findings: List[DragnetFinding]
    dataset_stats: DatasetStats
    generated_at: datetime
