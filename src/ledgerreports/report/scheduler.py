"""ReportScheduler — single-flight polling loop over pending report requests.

Contract:
    - ``tick()`` runs one cycle unless a cycle is already in flight, in which
      case it returns immediately without touching the store.
    - A cycle fetches up to ``batch_size`` pending requests, oldest first, and
      processes them one at a time in that order.
    - ``start()`` / ``stop()`` manage the interval timer on the running loop.
"""

import asyncio
import contextlib
import logging

from ledgerreports.report.processor import ReportProcessor
from ledgerreports.report.store import ReportRequestStore

logger = logging.getLogger(__name__)


class ReportScheduler:
    def __init__(
        self,
        store: ReportRequestStore,
        processor: ReportProcessor,
        interval_seconds: float = 60.0,
        batch_size: int = 10,
    ) -> None:
        self._store = store
        self._processor = processor
        self._interval = interval_seconds
        self._batch_size = batch_size
        self._cycle_lock = asyncio.Lock()
        self._timer: asyncio.Task | None = None
        self._ticks: set[asyncio.Task] = set()

    @property
    def is_cycle_running(self) -> bool:
        return self._cycle_lock.locked()

    @property
    def is_running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    async def tick(self) -> bool:
        """Run one cycle if none is in flight. Returns False when skipped. Never raises."""
        if self._cycle_lock.locked():
            logger.debug("Report cycle still running, skipping tick")
            return False

        async with self._cycle_lock:
            try:
                await self._run_cycle()
            except Exception:
                logger.exception("Report cycle failed")
        return True

    async def _run_cycle(self) -> int:
        """Process one batch of pending requests. Returns the number dispatched.

        Caller must hold ``_cycle_lock``; ``tick()`` is the only entry point.
        """
        pending = await self._store.find_pending(limit=self._batch_size)
        if not pending:
            return 0

        logger.info("Report cycle: %d pending requests", len(pending))
        for request in pending:
            request_id, kind = request.request_id, request.kind
            try:
                await self._processor.process(request_id, kind)
            except Exception:
                logger.exception("Report %s for request %s could not be processed", kind, request_id)
        return len(pending)

    def start(self) -> None:
        if self.is_running:
            return
        self._timer = asyncio.create_task(self._run_timer(), name="report-scheduler")
        logger.info("Report scheduler started, polling every %.0fs", self._interval)

    async def stop(self) -> None:
        """Stop the timer and wait for an in-flight cycle to finish."""
        if self._timer is not None:
            self._timer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._timer
            self._timer = None
        if self._ticks:
            await asyncio.gather(*self._ticks, return_exceptions=True)
        logger.info("Report scheduler stopped")

    async def _run_timer(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            # Fire and forget: a slow cycle makes later ticks skip, not queue
            task = asyncio.create_task(self.tick())
            self._ticks.add(task)
            task.add_done_callback(self._ticks.discard)
