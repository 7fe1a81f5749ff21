"""POST /v1/analyze - stateless QoE analysis"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request

from redflag.api.dependencies import get_engine_options, get_request_id
from redflag.api.v1.presenters import report_summary
from redflag.api.v1.schemas import AnalysisRequest, ReportResponse
from redflag.domain.exceptions import DomainException
from redflag.domain.report import build_report, report_to_dict
from redflag.infrastructure.observability.metrics import analysis_duration_histogram

router = APIRouter()


@router.post("/analyze", response_model=ReportResponse)
def analyze(
    request_body: AnalysisRequest,
    request: Request,
    engine_options: Dict[str, Any] = Depends(get_engine_options),
):
    """
    Run the red-flag engine without storing anything.

    Returns:
        Full QoE report keyed by the request ID
    """
    request_id = get_request_id(request)

    try:
        with analysis_duration_histogram.time():
            report = build_report(
                scan_id=request_id,
                company_name=request_body.company_name,
                ledger_entries=[e.to_domain() for e in request_body.ledger_entries],
                bank_transactions=[t.to_domain() for t in request_body.bank_transactions],
                customers=[c.to_domain() for c in request_body.customers],
                reported_net_income=request_body.reported_net_income,
                other_adjustments=request_body.other_adjustments,
                **engine_options,
            )
    except DomainException as e:
        logging.warning(f"Analysis rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    data = report_to_dict(report)
    return ReportResponse(**data, summary=report_summary(data))
