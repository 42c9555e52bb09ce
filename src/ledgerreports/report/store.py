"""ReportRequestStore — transactional access to report requests.

Every public operation opens its own session and commits before returning,
so a status change and the fields that belong to it become visible to
pollers together.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ledgerreports.db.models.report import ReportRequest
from ledgerreports.db.repos.report_repo import ReportRepo
from ledgerreports.domain.enums import ReportKind, ReportStatus
from ledgerreports.domain.errors import (
    InvalidTransitionError,
    RequestNotFoundError,
    StoreError,
    UnknownKindError,
)

logger = logging.getLogger(__name__)

ALL_KINDS: tuple[ReportKind, ...] = tuple(ReportKind)

# target status -> statuses it may be entered from; nothing leaves a terminal status
ALLOWED_TRANSITIONS: dict[ReportStatus, frozenset[ReportStatus]] = {
    ReportStatus.PROCESSING: frozenset({ReportStatus.PENDING}),
    **{s: frozenset({ReportStatus.PROCESSING}) for s in ReportStatus if s.is_terminal},
}


def parse_kind(kind: str | ReportKind) -> ReportKind:
    try:
        return ReportKind(kind)
    except ValueError:
        raise UnknownKindError(str(kind)) from None


class ReportRequestStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[ReportRepo]:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    yield ReportRepo(session)
        except SQLAlchemyError as e:
            logger.error("Report store %s failed: %s", operation, e)
            raise StoreError(f"Report store {operation} failed: {e}") from e

    async def create_batch(self, kinds: Iterable[str | ReportKind] = ALL_KINDS) -> str:
        """Create one pending request per kind under a fresh request id, all or nothing."""
        parsed = [parse_kind(k) for k in kinds]
        if not parsed:
            raise ValueError("At least one report kind is required")
        if len(set(parsed)) != len(parsed):
            raise ValueError("Report kinds must be unique within a batch")

        request_id = str(uuid.uuid4())
        async with self._transaction("create_batch") as repo:
            await repo.create_batch(request_id, parsed)

        logger.info("Created report requests %s for kinds %s", request_id, [k.value for k in parsed])
        return request_id

    async def find_pending(self, limit: int = 10) -> list[ReportRequest]:
        async with self._transaction("find_pending") as repo:
            return await repo.find_pending(limit, kinds=[k.value for k in ReportKind])

    async def get(self, request_id: str, kind: str | ReportKind) -> ReportRequest | None:
        kind_value = kind.value if isinstance(kind, ReportKind) else kind
        async with self._transaction("get") as repo:
            return await repo.get(request_id, kind_value)

    async def list_for_request(self, request_id: str) -> list[ReportRequest]:
        async with self._transaction("list_for_request") as repo:
            return await repo.list_for_request(request_id)

    async def update_status(
        self,
        request_id: str,
        kind: str | ReportKind,
        status: ReportStatus,
        *,
        error_message: str | None = None,
        output_location: str | None = None,
        processing_duration_ms: int | None = None,
    ) -> None:
        """Move a request to ``status`` and set exactly the fields that status carries."""
        status = ReportStatus(status)
        if status not in ALLOWED_TRANSITIONS:
            raise ValueError(f"Cannot transition a report request to {status.value}")

        values: dict = {
            "status": status.value,
            "error_message": None,
            "output_location": None,
            "processing_duration_ms": None,
        }
        if status is ReportStatus.COMPLETED:
            if output_location is None or processing_duration_ms is None:
                raise ValueError("Completed requests need output_location and processing_duration_ms")
            values["output_location"] = output_location
            values["processing_duration_ms"] = processing_duration_ms
        elif status is ReportStatus.ERROR:
            if not error_message:
                raise ValueError("Errored requests need an error_message")
            values["error_message"] = error_message

        kind_value = kind.value if isinstance(kind, ReportKind) else kind
        sources = [s.value for s in ALLOWED_TRANSITIONS[status]]
        async with self._transaction("update_status") as repo:
            updated = await repo.update_fields(request_id, kind_value, sources, values)
            if updated == 0:
                current = await repo.get(request_id, kind_value)
                if current is None:
                    raise RequestNotFoundError(request_id, kind_value)
                raise InvalidTransitionError(request_id, kind_value, current.status, status.value)

    async def mark_processing(self, request_id: str, kind: str | ReportKind) -> None:
        await self.update_status(request_id, kind, ReportStatus.PROCESSING)

    async def mark_completed(
        self,
        request_id: str,
        kind: str | ReportKind,
        output_location: str,
        processing_duration_ms: int,
    ) -> None:
        await self.update_status(
            request_id,
            kind,
            ReportStatus.COMPLETED,
            output_location=output_location,
            processing_duration_ms=processing_duration_ms,
        )

    async def mark_error(self, request_id: str, kind: str | ReportKind, error_message: str) -> None:
        await self.update_status(request_id, kind, ReportStatus.ERROR, error_message=error_message)
