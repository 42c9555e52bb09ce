"""Reports API — queue report generation and poll its status."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from ledgerreports.api.deps import get_report_service
from ledgerreports.api.schemas.reports import ReportGenerateResponse, ReportStatusResponse
from ledgerreports.domain.errors import StoreError
from ledgerreports.report.service import ReportService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])

ServiceDep = Annotated[ReportService, Depends(get_report_service)]


@router.post("", status_code=status.HTTP_202_ACCEPTED, response_model=ReportGenerateResponse)
async def generate_reports(service: ServiceDep) -> ReportGenerateResponse:
    """Queue the balance, yearly and statement reports under one request id."""
    try:
        request_id = await service.generate()
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return ReportGenerateResponse(request_id=request_id)


@router.get("/{request_id}")
async def get_report_statuses(request_id: str, service: ServiceDep) -> dict[str, str]:
    """Status of every report under ``request_id``, keyed by output file name."""
    try:
        return await service.statuses(request_id)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/{request_id}/{kind}", response_model=ReportStatusResponse)
async def get_report_status(request_id: str, kind: str, service: ServiceDep) -> ReportStatusResponse:
    try:
        report_status = await service.status(kind, request_id)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return ReportStatusResponse(request_id=request_id, kind=kind, status=report_status)
