"""Integration tests for Reports API endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from ledgerreports.api.deps import get_report_service
from ledgerreports.api.main import app
from ledgerreports.domain.enums import ReportKind
from ledgerreports.domain.errors import StoreError
from ledgerreports.report.service import ReportService


@pytest.fixture()
async def client(store):
    app.dependency_overrides[get_report_service] = lambda: ReportService(store)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class TestGenerateAPI:
    async def test_generate_returns_202_with_request_id(self, client):
        resp = await client.post("/api/v1/reports")

        assert resp.status_code == 202
        data = resp.json()
        assert data["request_id"]
        assert data["message"] == "Report generation started in the background"

    async def test_store_failure_returns_503(self):
        service = AsyncMock()
        service.generate.side_effect = StoreError("database unavailable")
        app.dependency_overrides[get_report_service] = lambda: service
        try:
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
                resp = await ac.post("/api/v1/reports")
        finally:
            app.dependency_overrides.clear()

        assert resp.status_code == 503


class TestStatusAPI:
    async def test_all_pending_after_generate(self, client):
        request_id = (await client.post("/api/v1/reports")).json()["request_id"]

        resp = await client.get(f"/api/v1/reports/{request_id}")

        assert resp.status_code == 200
        assert resp.json() == {"accounts.csv": "pending", "yearly.csv": "pending", "fs.csv": "pending"}

    async def test_single_kind(self, client, store):
        request_id = (await client.post("/api/v1/reports")).json()["request_id"]
        await store.mark_processing(request_id, ReportKind.YEARLY)

        resp = await client.get(f"/api/v1/reports/{request_id}/yearly")

        assert resp.status_code == 200
        assert resp.json() == {"request_id": request_id, "kind": "yearly", "status": "processing"}

    async def test_not_found_is_not_an_error(self, client):
        resp = await client.get("/api/v1/reports/00000000-0000-0000-0000-000000000000/balance")

        assert resp.status_code == 200
        assert resp.json()["status"] == "not found"

    @pytest.mark.parametrize("path, method", [("/api/v1/reports/abc", "statuses"), ("/api/v1/reports/abc/balance", "status")])
    async def test_store_failure_returns_503(self, path, method):
        service = AsyncMock()
        getattr(service, method).side_effect = StoreError("database unavailable")
        app.dependency_overrides[get_report_service] = lambda: service
        try:
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
                resp = await ac.get(path)
        finally:
            app.dependency_overrides.clear()

        assert resp.status_code == 503
        assert resp.json()["detail"] == "database unavailable"


class TestHealthAPI:
    async def test_health(self, client):
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
