"""End-to-end: generate -> scheduler cycle -> output files and status text."""

import re

from ledgerreports.domain.enums import ReportKind
from ledgerreports.report.processor import ReportProcessor
from ledgerreports.report.scheduler import ReportScheduler
from ledgerreports.report.service import ReportService

LEDGER = [
    "2023-02-01,Cash,,200,0",
    "2023-02-01,Sales Revenue,,0,200",
    "2023-07-15,Cash,,0,50",
    "2023-07-15,Rent Expense,,50,0",
    "2024-01-10,Cash,,0,20",
    "2024-01-10,Utilities Expense,,20,0",
]


class TestReportPipeline:
    async def test_generate_then_cycle_completes_all_kinds(self, store, ledger_dir, output_dir, write_ledger):
        write_ledger("2023.csv", LEDGER)
        service = ReportService(store)
        scheduler = ReportScheduler(store, ReportProcessor(store, ledger_dir, output_dir))

        request_id = await service.generate()
        assert await service.statuses(request_id) == {
            "accounts.csv": "pending",
            "yearly.csv": "pending",
            "fs.csv": "pending",
        }

        await scheduler.tick()

        for kind in ReportKind:
            assert re.fullmatch(r"finished in \d+\.\d{2}", await service.status(kind.value, request_id))

        out = output_dir / request_id
        assert sorted(p.name for p in out.iterdir()) == ["accounts.csv", "fs.csv", "yearly.csv"]
        assert (out / "accounts.csv").read_text().splitlines() == [
            "Account,Balance",
            "Cash,130.00",
            "Sales Revenue,-200.00",
            "Rent Expense,50.00",
            "Utilities Expense,20.00",
        ]
        assert (out / "yearly.csv").read_text() == "Financial Year,Cash Balance\n2023,150.00\n2024,-20.00"
        assert "Total Assets,130.00" in (out / "fs.csv").read_text().splitlines()

    async def test_cycle_with_missing_ledger_dir_errors_every_kind(self, store, tmp_path, output_dir):
        service = ReportService(store)
        scheduler = ReportScheduler(store, ReportProcessor(store, tmp_path / "missing", output_dir))

        request_id = await service.generate()
        await scheduler.tick()

        assert await service.statuses(request_id) == {
            "accounts.csv": "error",
            "yearly.csv": "error",
            "fs.csv": "error",
        }
