"""Scan endpoints - create, analyze, store and fetch QoE scans"""

import logging
import time
import uuid
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from redflag.api.dependencies import (
    get_engine_options,
    get_notification_client,
    get_request_id,
    get_user_id,
)
from redflag.api.v1.presenters import scan_to_response, scan_to_summary
from redflag.api.v1.schemas import CsvScanRequest, HistoryResponse, ScanCreateRequest, ScanResponse
from redflag.config import settings
from redflag.demo import (
    DEMO_COMPANY,
    DEMO_OTHER_ADJUSTMENTS,
    DEMO_REPORTED_NET_INCOME,
    demo_bank_transactions,
    demo_customers,
    demo_ledger_entries,
)
from redflag.domain.exceptions import DomainException, InvalidRecordError, UploadTooLargeError
from redflag.domain.models import BankTransaction, CustomerData, LedgerEntry
from redflag.domain.report import build_report
from redflag.infrastructure.clients.notifications import NotificationClient
from redflag.infrastructure.database.models import Scan
from redflag.infrastructure.database.repositories import ScanRepository
from redflag.infrastructure.database.session import get_db
from redflag.infrastructure.observability.logging import log_scan_completed
from redflag.infrastructure.observability.metrics import (
    analysis_duration_histogram,
    record_analysis,
    record_failure,
)
from redflag.infrastructure.parsers.csv_records import parse_bank_csv, parse_ledger_csv

router = APIRouter()


def _run_scan(
    db: Session,
    request_id: str,
    user_id: str,
    company_name: str,
    industry: Optional[str],
    asking_price: Optional[float],
    ledger_entries: List[LedgerEntry],
    bank_transactions: List[BankTransaction],
    customers: List[CustomerData],
    reported_net_income: Optional[float],
    other_adjustments: float,
    engine_options: Dict[str, Any],
    background_tasks: BackgroundTasks,
    notifier: NotificationClient,
) -> Scan:
    """
    Create a scan, run the engine and store the outputs.

    Flow:
    1. Persist pending scan with raw inputs
    2. Mark processing and build the report
    3. Store outputs, commit
    4. Schedule completion webhook, record metrics and logs

    Analysis failures leave the scan stored as failed.
    """
    start_time = time.time()
    repo = ScanRepository(db)

    scan = repo.create_scan(
        user_id=user_id,
        company_name=company_name,
        industry=industry,
        asking_price=asking_price,
        ledger_data=[asdict(e) for e in ledger_entries],
        bank_data=[asdict(t) for t in bank_transactions],
        customer_data=[asdict(c) for c in customers],
    )
    repo.mark_processing(scan)

    try:
        with analysis_duration_histogram.time():
            report = build_report(
                scan_id=str(scan.id),
                company_name=company_name,
                ledger_entries=ledger_entries,
                bank_transactions=bank_transactions,
                customers=customers,
                reported_net_income=reported_net_income,
                other_adjustments=other_adjustments,
                **engine_options,
            )
    except Exception as e:
        repo.fail_scan(scan, str(e))
        db.commit()
        record_failure()
        if isinstance(e, DomainException):
            logging.warning(f"Scan rejected: {e}", extra={"request_id": request_id, "scan_id": str(scan.id)})
            raise HTTPException(status_code=422, detail=str(e))
        logging.error(f"Analysis failed: {e}", extra={"request_id": request_id, "scan_id": str(scan.id)})
        raise HTTPException(status_code=500, detail="Internal server error")

    try:
        repo.complete_scan(scan, report)
        db.commit()
    except Exception as e:
        db.rollback()
        record_failure()
        logging.error(f"Failed to store scan: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    if notifier.enabled:
        background_tasks.add_task(
            notifier.send_scan_completed,
            {
                "event": "SCAN_COMPLETED",
                "scan_id": str(scan.id),
                "user_id": user_id,
                "risk_score": report.risk_score,
                "risk_level": report.risk_level,
            },
        )

    duration_ms = (time.time() - start_time) * 1000
    record_analysis(report)
    log_scan_completed(request_id, str(scan.id), report.risk_score, report.risk_level, duration_ms)

    return scan


@router.post("/scans", response_model=ScanResponse)
def create_scan(
    request_body: ScanCreateRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
    engine_options: Dict[str, Any] = Depends(get_engine_options),
    notifier: NotificationClient = Depends(get_notification_client),
):
    """Analyze JSON ledger/bank/customer records and store the scan"""
    scan = _run_scan(
        db,
        request_id=get_request_id(request),
        user_id=user_id,
        company_name=request_body.company_name,
        industry=request_body.industry,
        asking_price=request_body.asking_price,
        ledger_entries=[e.to_domain() for e in request_body.ledger_entries],
        bank_transactions=[t.to_domain() for t in request_body.bank_transactions],
        customers=[c.to_domain() for c in request_body.customers],
        reported_net_income=request_body.reported_net_income,
        other_adjustments=request_body.other_adjustments,
        engine_options=engine_options,
        background_tasks=background_tasks,
        notifier=notifier,
    )
    return scan_to_response(scan)


@router.post("/scans/csv", response_model=ScanResponse)
def create_scan_from_csv(
    request_body: CsvScanRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
    engine_options: Dict[str, Any] = Depends(get_engine_options),
    notifier: NotificationClient = Depends(get_notification_client),
):
    """
    Parse ledger and bank CSV exports, then analyze and store the scan.

    Rows that fail validation are skipped and counted in skipped_rows.
    """
    request_id = get_request_id(request)
    try:
        ledger = parse_ledger_csv(request_body.ledger_csv, max_bytes=settings.max_upload_bytes)
        bank = parse_bank_csv(request_body.bank_csv, max_bytes=settings.max_upload_bytes)
    except UploadTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except InvalidRecordError as e:
        logging.warning(f"Unreadable upload: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    scan = _run_scan(
        db,
        request_id=request_id,
        user_id=user_id,
        company_name=request_body.company_name,
        industry=request_body.industry,
        asking_price=request_body.asking_price,
        ledger_entries=ledger.records,
        bank_transactions=bank.records,
        customers=[c.to_domain() for c in request_body.customers],
        reported_net_income=request_body.reported_net_income,
        other_adjustments=request_body.other_adjustments,
        engine_options=engine_options,
        background_tasks=background_tasks,
        notifier=notifier,
    )
    return scan_to_response(scan, skipped_rows=ledger.skipped_rows + bank.skipped_rows)


@router.post("/scans/demo", response_model=ScanResponse)
def create_demo_scan(
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
    engine_options: Dict[str, Any] = Depends(get_engine_options),
    notifier: NotificationClient = Depends(get_notification_client),
):
    """Run a scan on the built-in Acme Distribution demo data"""
    scan = _run_scan(
        db,
        request_id=get_request_id(request),
        user_id=user_id,
        company_name=DEMO_COMPANY["name"],
        industry=DEMO_COMPANY["industry"],
        asking_price=DEMO_COMPANY["asking_price"],
        ledger_entries=demo_ledger_entries(),
        bank_transactions=demo_bank_transactions(),
        customers=demo_customers(),
        reported_net_income=DEMO_REPORTED_NET_INCOME,
        other_adjustments=DEMO_OTHER_ADJUSTMENTS,
        engine_options=engine_options,
        background_tasks=background_tasks,
        notifier=notifier,
    )
    return scan_to_response(scan)


@router.get("/scans", response_model=HistoryResponse)
def get_scan_history(
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    """
    Retrieve recent scans for a user, newest first.
    """
    scans = ScanRepository(db).get_scans_by_user(user_id, limit=settings.history_limit)
    return HistoryResponse(user_id=user_id, scans=[scan_to_summary(s) for s in scans])


@router.get("/scans/{scan_id}", response_model=ScanResponse)
def get_scan(
    scan_id: str,
    redacted: bool = Query(False, description="Mask vendor, amount and customer details"),
    db: Session = Depends(get_db),
):
    """
    Retrieve a stored scan with its report.

    Redaction only changes this response; stored values stay intact.
    """
    try:
        scan_uuid = uuid.UUID(scan_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid scan ID format")

    scan = ScanRepository(db).get_scan(scan_uuid)
    if not scan:
        raise HTTPException(status_code=404, detail="Scan not found")

    return scan_to_response(scan, redacted=redacted)
