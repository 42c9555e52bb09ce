"""ReportProcessor — runs one report request through its aggregator."""

import asyncio
import logging
import time
from pathlib import Path
from typing import Mapping

from ledgerreports.domain.enums import ReportKind
from ledgerreports.report.aggregators import AGGREGATORS, Aggregator
from ledgerreports.report.store import ReportRequestStore
from ledgerreports.report.writer import write_report

logger = logging.getLogger(__name__)


class ReportProcessor:
    """Drives a request pending -> processing -> completed | error.

    A failing aggregation is recorded on that request only and never raised,
    so sibling kinds and the rest of a scheduler batch are unaffected.
    Store failures while recording status do propagate.
    """

    def __init__(
        self,
        store: ReportRequestStore,
        ledger_dir: Path | str,
        output_dir: Path | str,
        aggregators: Mapping[ReportKind, Aggregator] | None = None,
    ) -> None:
        self._store = store
        self._ledger_dir = Path(ledger_dir)
        self._output_dir = Path(output_dir)
        self._aggregators = dict(AGGREGATORS if aggregators is None else aggregators)

    def _resolve(self, kind: str) -> tuple[ReportKind | None, Aggregator | None]:
        try:
            report_kind = ReportKind(kind)
        except ValueError:
            return None, None
        return report_kind, self._aggregators.get(report_kind)

    async def process(self, request_id: str, kind: str | ReportKind) -> None:
        report_kind, aggregator = self._resolve(kind)
        if report_kind is None or aggregator is None:
            logger.error("Unknown report kind %r for request %s, skipping", kind, request_id)
            return

        await self._store.mark_processing(request_id, report_kind)
        logger.info("Processing %s report for request %s", report_kind.value, request_id)

        start = time.perf_counter()
        try:
            body = await asyncio.to_thread(aggregator, self._ledger_dir)
            path = await asyncio.to_thread(write_report, self._output_dir, request_id, report_kind, body)
        except Exception as e:
            logger.exception("Report %s failed for request %s", report_kind.value, request_id)
            await self._store.mark_error(request_id, report_kind, str(e) or type(e).__name__)
            return

        duration_ms = round((time.perf_counter() - start) * 1000)
        await self._store.mark_completed(request_id, report_kind, str(path), duration_ms)
        logger.info("Report %s for request %s written to %s in %d ms", report_kind.value, request_id, path, duration_ms)
