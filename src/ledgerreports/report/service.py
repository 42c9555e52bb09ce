"""ReportService — entry points used by the HTTP layer."""

from ledgerreports.db.models.report import ReportRequest
from ledgerreports.domain.enums import ReportKind, ReportStatus
from ledgerreports.report.aggregators import OUTPUT_FILENAMES
from ledgerreports.report.store import ALL_KINDS, ReportRequestStore


NOT_FOUND = "not found"


def describe_status(request: ReportRequest | None) -> str:
    """Client-facing status text for a request row."""
    if request is None:
        return NOT_FOUND
    if request.status == ReportStatus.COMPLETED.value:
        seconds = (request.processing_duration_ms or 0) / 1000
        return f"finished in {seconds:.2f}"
    return request.status


class ReportService:
    def __init__(self, store: ReportRequestStore) -> None:
        self._store = store

    async def generate(self) -> str:
        """Queue all report kinds under a new request id; processing happens on the scheduler."""
        return await self._store.create_batch(ALL_KINDS)

    async def status(self, kind: str, request_id: str) -> str:
        try:
            report_kind = ReportKind(kind)
        except ValueError:
            return NOT_FOUND
        return describe_status(await self._store.get(request_id, report_kind))

    async def statuses(self, request_id: str) -> dict[str, str]:
        """Status text per output file name, for every kind."""
        rows = {r.kind: r for r in await self._store.list_for_request(request_id)}
        return {
            OUTPUT_FILENAMES[kind]: describe_status(rows.get(kind.value))
            for kind in ReportKind
        }
