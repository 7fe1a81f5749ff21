"""Data access layer for scans"""

import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from redflag.domain.models import QoEReport
from redflag.infrastructure.database.models import Scan


class ScanRepository:
    """Repository for QoE scans"""

    def __init__(self, db: Session):
        self.db = db

    def create_scan(
        self,
        user_id: str,
        company_name: str,
        industry: Optional[str] = None,
        asking_price: Optional[float] = None,
        ledger_data: Optional[List[Dict[str, Any]]] = None,
        bank_data: Optional[List[Dict[str, Any]]] = None,
        customer_data: Optional[List[Dict[str, Any]]] = None,
    ) -> Scan:
        """Persist a pending scan with its raw inputs"""
        db_scan = Scan(
            user_id=user_id,
            company_name=company_name,
            industry=industry,
            asking_price=asking_price,
            status="pending",
            ledger_data=ledger_data,
            bank_data=bank_data,
            customer_data=customer_data,
        )
        self.db.add(db_scan)
        self.db.flush()  # Get ID without committing
        return db_scan

    def mark_processing(self, scan: Scan) -> Scan:
        scan.status = "processing"
        self.db.flush()
        return scan

    def complete_scan(self, scan: Scan, report: QoEReport) -> Scan:
        """Store engine outputs and mark the scan completed"""
        scan.status = "completed"
        scan.risk_score = report.risk_score
        scan.risk_level = report.risk_level
        scan.revenue_analysis = asdict(report.revenue_analysis)
        scan.personal_expenses = [asdict(e) for e in report.personal_expenses]
        scan.customer_churn = asdict(report.customer_churn)
        scan.ebitda_bridge = asdict(report.ebitda_bridge)
        scan.forensic_findings = [asdict(f) for f in report.forensic_findings]
        scan.dataset_stats = asdict(report.dataset_stats)
        scan.completed_at = report.generated_at
        self.db.flush()
        return scan

    def fail_scan(self, scan: Scan, message: str) -> Scan:
        scan.status = "failed"
        scan.error_message = message
        scan.completed_at = datetime.now(timezone.utc)
        self.db.flush()
        return scan

    def get_scan(self, scan_id: uuid.UUID) -> Optional[Scan]:
        return (
            self.db.query(Scan)
            .filter(Scan.id == scan_id)
            .first()
        )

    def get_scans_by_user(self, user_id: str, limit: int = 10) -> List[Scan]:
        """Fetch recent scans for a user"""
        return (
            self.db.query(Scan)
            .filter(Scan.user_id == user_id)
            .order_by(Scan.created_at.desc())
            .limit(limit)
            .all()
        )
