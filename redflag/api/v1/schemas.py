"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from redflag.domain.models import BankTransaction, CustomerData, LedgerEntry


# Input records


class LedgerEntrySchema(BaseModel):
    """One accounting-ledger line"""

    date: str = Field(..., min_length=1, description="YYYY-MM-DD or YYYY-MM; other values are skipped")
    description: str = ""
    category: str = "Uncategorized"
    amount: float = Field(..., ge=0, allow_inf_nan=False)
    type: Literal["revenue", "expense"]

    def to_domain(self) -> LedgerEntry:
        return LedgerEntry(self.date, self.description, self.category, self.amount, self.type)


class BankTransactionSchema(BaseModel):
    """One bank-statement line"""

    date: str = Field(..., min_length=1)
    description: str = ""
    amount: float = Field(..., ge=0, allow_inf_nan=False)
    type: Literal["deposit", "withdrawal"]

    def to_domain(self) -> BankTransaction:
        return BankTransaction(self.date, self.description, self.amount, self.type)


class CustomerDataSchema(BaseModel):
    """Three-month spend for one customer"""

    name: str = Field(..., min_length=1)
    month1_spend: float = Field(..., ge=0, allow_inf_nan=False)
    month2_spend: float = Field(..., ge=0, allow_inf_nan=False)
    month3_spend: float = Field(..., ge=0, allow_inf_nan=False)
    trend: Literal["up", "down", "stable"] = "stable"
    percentage_change: float = Field(0.0, allow_inf_nan=False)
    flagged: bool = False

    def to_domain(self) -> CustomerData:
        return CustomerData(
            name=self.name,
            month1_spend=self.month1_spend,
            month2_spend=self.month2_spend,
            month3_spend=self.month3_spend,
            trend=self.trend,
            percentage_change=self.percentage_change,
            flagged=self.flagged,
        )


# Requests


class AnalysisRequest(BaseModel):
    """Request body for POST /v1/analyze"""

    company_name: str = Field(..., min_length=1)
    ledger_entries: List[LedgerEntrySchema]
    bank_transactions: List[BankTransactionSchema]
    customers: List[CustomerDataSchema] = Field(default_factory=list)
    reported_net_income: Optional[float] = Field(
        None, allow_inf_nan=False, description="Defaults to booked revenue minus expenses"
    )
    other_adjustments: float = Field(0.0, allow_inf_nan=False)


class ScanCreateRequest(AnalysisRequest):
    """Request body for POST /v1/scans"""

    industry: Optional[str] = None
    asking_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)


class CsvScanRequest(BaseModel):
    """Request body for POST /v1/scans/csv - raw CSV exports"""

    company_name: str = Field(..., min_length=1)
    industry: Optional[str] = None
    asking_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    ledger_csv: str = Field(..., min_length=1)
    bank_csv: str = Field(..., min_length=1)
    customers: List[CustomerDataSchema] = Field(default_factory=list)
    reported_net_income: Optional[float] = Field(None, allow_inf_nan=False)
    other_adjustments: float = Field(0.0, allow_inf_nan=False)


# Report output


class MonthlyRevenueSchema(BaseModel):
    month: str
    booked_revenue: int
    actual_deposits: int
    discrepancy: int
    discrepancy_percentage: float
    flagged: bool


class RevenueAnalysisSchema(BaseModel):
    monthly_data: List[MonthlyRevenueSchema]
    discrepancy_found: bool
    flagged_months: List[str]
    discrepancy_amount: int
    discrepancy_percentage: float


class PersonalExpenseSchema(BaseModel):
    id: str
    date: str
    vendor: str
    amount: float
    category: str
    flag_reason: str
    severity: Literal["low", "medium", "high"]


class ChurnDetailSchema(BaseModel):
    name: str
    percent_change: float
    trend: str


class ChurnAnalysisSchema(BaseModel):
    churn_risk: bool
    at_risk_customers: List[str]
    churn_details: List[ChurnDetailSchema]
    concentration_risk: bool
    top_customer_percentage: float
    top_customer: Optional[str] = None
    customers: List[CustomerDataSchema] = Field(default_factory=list)


class EBITDABridgeSchema(BaseModel):
    reported_net_income: float
    personal_expense_add_back: float
    other_adjustments: float
    true_adjusted_ebitda: float


class DragnetFindingSchema(BaseModel):
    row_number: int
    description: str
    amount: float
    flags: List[str]
    level: Literal["warning", "danger"]
    message: str


class DatasetStatsSchema(BaseModel):
    count: int
    total_amount: float
    average_amount: float


class ReportSummarySchema(BaseModel):
    """Display strings for the report header"""

    risk_badge: str
    revenue_variance: str
    personal_expense_add_back: str
    adjusted_ebitda: str


class ReportResponse(BaseModel):
    """Response for POST /v1/analyze"""

    scan_id: str
    company_name: str
    risk_score: int = Field(..., ge=0, le=100)
    risk_level: Literal["low", "medium", "high"]
    revenue_analysis: RevenueAnalysisSchema
    customer_churn: ChurnAnalysisSchema
    personal_expenses: List[PersonalExpenseSchema]
    ebitda_bridge: EBITDABridgeSchema
    forensic_findings: List[DragnetFindingSchema]
    dataset_stats: DatasetStatsSchema
    summary: ReportSummarySchema
    generated_at: datetime


class ScanResponse(BaseModel):
    """Stored scan with engine outputs"""

    scan_id: str
    user_id: str
    company_name: str
    industry: Optional[str] = None
    asking_price: Optional[float] = None
    status: Literal["pending", "processing", "completed", "failed"]
    risk_score: Optional[int] = None
    risk_level: Optional[str] = None
    revenue_analysis: Optional[RevenueAnalysisSchema] = None
    personal_expenses: Optional[List[PersonalExpenseSchema]] = None
    customer_churn: Optional[ChurnAnalysisSchema] = None
    ebitda_bridge: Optional[EBITDABridgeSchema] = None
    forensic_findings: Optional[List[DragnetFindingSchema]] = None
    dataset_stats: Optional[DatasetStatsSchema] = None
    summary: Optional[ReportSummarySchema] = None
    error_message: Optional[str] = None
    skipped_rows: int = 0
    redacted: bool = False
    created_at: str
    completed_at: Optional[str] = None


class ScanSummary(BaseModel):
    """Single scan in history"""

    scan_id: str
    company_name: str
    status: str
    risk_score: Optional[int] = None
    risk_level: Optional[str] = None
    created_at: str


class HistoryResponse(BaseModel):
    """Response for GET /v1/scans"""

    user_id: str
    scans: List[ScanSummary]
