"""SQLAlchemy ORM models for stored scans"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Float, Integer, JSON, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

SCAN_STATUSES = ("pending", "processing", "completed", "failed")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Scan(Base):
    """One QoE scan: company metadata, raw inputs and serialized engine outputs"""

    __tablename__ = "scan"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    company_name = Column(Text, nullable=False)
    industry = Column(Text, nullable=True)
    asking_price = Column(Float, nullable=True)
    status = Column(Text, nullable=False, default="pending")
    risk_score = Column(Integer, nullable=True)
    risk_level = Column(Text, nullable=True)

    # Engine outputs
    revenue_analysis = Column(JSON, nullable=True)
    personal_expenses = Column(JSON, nullable=True)
    customer_churn = Column(JSON, nullable=True)
    ebitda_bridge = Column(JSON, nullable=True)
    forensic_findings = Column(JSON, nullable=True)
    dataset_stats = Column(JSON, nullable=True)

    # Inputs as received
    ledger_data = Column(JSON, nullable=True)
    bank_data = Column(JSON, nullable=True)
    customer_data = Column(JSON, nullable=True)

    error_message = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now())
    completed_at = Column(DateTime(timezone=True), nullable=True)
