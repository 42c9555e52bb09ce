"""Schemas for /api/v1/reports endpoints."""

from pydantic import BaseModel


class ReportGenerateResponse(BaseModel):
    request_id: str
    message: str = "Report generation started in the background"


class ReportStatusResponse(BaseModel):
    request_id: str
    kind: str
    status: str
