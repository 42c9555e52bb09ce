"""Report request — one row per (request_id, kind)."""

from typing import Optional

from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ledgerreports.db.session import Base, TimestampMixin
from ledgerreports.domain.enums import ReportStatus


class ReportRequest(TimestampMixin, Base):
    """Lifecycle of one report kind generated under a shared request_id."""

    __tablename__ = "report_requests"
    __table_args__ = (UniqueConstraint("request_id", "kind", name="uq_report_requests_request_id_kind"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    request_id: Mapped[str] = mapped_column(String(36), index=True)
    kind: Mapped[str] = mapped_column(String(20))
    status: Mapped[str] = mapped_column(String(20), default=ReportStatus.PENDING.value, index=True)
    # status: pending -> processing -> completed / error
    error_message: Mapped[Optional[str]] = mapped_column(Text, default=None)
    output_location: Mapped[Optional[str]] = mapped_column(String(512), default=None)
    processing_duration_ms: Mapped[Optional[int]] = mapped_column(Integer, default=None)
