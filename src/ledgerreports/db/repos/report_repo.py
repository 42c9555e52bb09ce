from typing import Any, Iterable

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerreports.db.models.report import ReportRequest
from ledgerreports.domain.enums import ReportKind, ReportStatus


class ReportRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_batch(self, request_id: str, kinds: Iterable[ReportKind]) -> list[ReportRequest]:
        """Insert one pending row per kind. Caller owns the transaction."""
        rows = [
            ReportRequest(request_id=request_id, kind=kind.value, status=ReportStatus.PENDING.value)
            for kind in kinds
        ]
        self._session.add_all(rows)
        await self._session.flush()
        return rows

    async def get(self, request_id: str, kind: str) -> ReportRequest | None:
        result = await self._session.execute(
            select(ReportRequest).where(
                ReportRequest.request_id == request_id,
                ReportRequest.kind == kind,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_request(self, request_id: str) -> list[ReportRequest]:
        result = await self._session.execute(
            select(ReportRequest)
            .where(ReportRequest.request_id == request_id)
            .order_by(ReportRequest.id)
        )
        return list(result.scalars().all())

    async def find_pending(self, limit: int, kinds: Iterable[str]) -> list[ReportRequest]:
        """Oldest pending requests first; id breaks created_at ties."""
        result = await self._session.execute(
            select(ReportRequest)
            .where(
                ReportRequest.status == ReportStatus.PENDING.value,
                ReportRequest.kind.in_(list(kinds)),
            )
            .order_by(ReportRequest.created_at.asc(), ReportRequest.id.asc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def update_fields(
        self,
        request_id: str,
        kind: str,
        from_statuses: Iterable[str],
        values: dict[str, Any],
    ) -> int:
        """Conditional UPDATE guarded by the current status. Returns affected row count."""
        result = await self._session.execute(
            update(ReportRequest)
            .where(
                ReportRequest.request_id == request_id,
                ReportRequest.kind == kind,
                ReportRequest.status.in_(list(from_statuses)),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
