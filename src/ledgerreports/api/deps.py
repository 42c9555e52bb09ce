from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from ledgerreports.container import Container
from ledgerreports.report.service import ReportService


@inject
async def get_report_service(
    service: ReportService = Depends(Provide[Container.report_service]),
) -> ReportService:
    return service
