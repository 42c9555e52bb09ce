"""Tests for ReportService — generate and status text."""

from ledgerreports.domain.enums import ReportKind
from ledgerreports.report.service import ReportService


class TestGenerate:
    async def test_all_kinds_pending(self, store):
        service = ReportService(store)

        request_id = await service.generate()

        for kind in ("balance", "yearly", "statement"):
            assert await service.status(kind, request_id) == "pending"


class TestStatus:
    async def test_not_found_for_unknown_request(self, store):
        service = ReportService(store)
        assert await service.status("balance", "never-created") == "not found"

    async def test_not_found_for_unknown_kind(self, store):
        service = ReportService(store)
        request_id = await service.generate()
        assert await service.status("ledger", request_id) == "not found"

    async def test_processing_and_error_tokens(self, store):
        service = ReportService(store)
        request_id = await service.generate()
        await store.mark_processing(request_id, ReportKind.YEARLY)
        await store.mark_processing(request_id, ReportKind.STATEMENT)
        await store.mark_error(request_id, ReportKind.STATEMENT, "bad row")

        assert await service.status("yearly", request_id) == "processing"
        assert await service.status("statement", request_id) == "error"

    async def test_finished_in_seconds(self, store):
        service = ReportService(store)
        request_id = await service.generate()
        await store.mark_processing(request_id, ReportKind.BALANCE)
        await store.mark_completed(request_id, ReportKind.BALANCE, "out/x/accounts.csv", 1234)

        assert await service.status("balance", request_id) == "finished in 1.23"


class TestStatuses:
    async def test_keyed_by_output_filename(self, store):
        service = ReportService(store)
        request_id = await service.generate()
        await store.mark_processing(request_id, ReportKind.BALANCE)
        await store.mark_completed(request_id, ReportKind.BALANCE, "out/x/accounts.csv", 20)

        assert await service.statuses(request_id) == {
            "accounts.csv": "finished in 0.02",
            "yearly.csv": "pending",
            "fs.csv": "pending",
        }

    async def test_unknown_request(self, store):
        service = ReportService(store)
        assert await service.statuses("missing") == {
            "accounts.csv": "not found",
            "yearly.csv": "not found",
            "fs.csv": "not found",
        }
