"""
NoteKeeper — Application Wiring Tests
=======================================

What we test:
    ✅ Health endpoint reports note count and version
    ✅ X-Request-ID is echoed or generated
    ✅ Error responses carry the request id header too
    ✅ Each app gets its own store
"""

import logging
from unittest.mock import patch

import pytest
from httpx import AsyncClient, ASGITransport

from notekeeper import __version__
from notekeeper.main import create_app


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_store_size(self, test_client, sample_payload):
        await test_client.post("/note", json=sample_payload)
        await test_client.post("/note", json=sample_payload)

        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == __version__
        assert body["notes"] == 2
        assert body["uptime_seconds"] >= 0


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_request_id(self, test_client):
        response = await test_client.get("/health")
        assert len(response.headers["x-request-id"]) == 8

    @pytest.mark.asyncio
    async def test_client_request_id_echoed(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "trace-me"})
        assert response.headers["x-request-id"] == "trace-me"

    @pytest.mark.asyncio
    async def test_request_id_on_error_response(self, test_client):
        response = await test_client.get("/note", headers={"X-Request-ID": "err-1"})

        assert response.status_code == 400
        assert response.headers["x-request-id"] == "err-1"


class TestRequestLogging:

    @pytest.mark.asyncio
    async def test_client_error_logged_as_warning(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="notekeeper.access"):
            await test_client.get("/note", params={"id": "missing"})

        records = [r for r in caplog.records if r.name == "notekeeper.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert records[0].status == 404
        assert records[0].path == "/note"

    @pytest.mark.asyncio
    async def test_health_not_logged(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="notekeeper.access"):
            await test_client.get("/health")

        assert not [r for r in caplog.records if r.name == "notekeeper.access"]

    @pytest.mark.asyncio
    async def test_unexpected_error_is_plain_500(self, store, caplog):
        app = create_app(store=store)

        @app.get("/boom")
        async def boom():
            raise RuntimeError("kaboom")

        transport = ASGITransport(app=app)
        with caplog.at_level(logging.INFO, logger="notekeeper.access"):
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/boom", headers={"X-Request-ID": "boom-1"})

        assert response.status_code == 500
        assert response.text == "internal server error"
        assert "kaboom" not in response.text
        assert response.headers["x-request-id"] == "boom-1"

        access = [r for r in caplog.records if hasattr(r, "status")]
        assert len(access) == 1
        assert access[0].levelno == logging.ERROR
        assert access[0].status == 500


class TestAppFactory:

    @pytest.mark.asyncio
    async def test_apps_do_not_share_notes(self, sample_payload):
        first, second = create_app(), create_app()

        async with AsyncClient(transport=ASGITransport(app=first), base_url="http://test") as c1, \
                AsyncClient(transport=ASGITransport(app=second), base_url="http://test") as c2:
            note_id = (await c1.post("/note", json=sample_payload)).json()["id"]

            assert (await c1.get("/note", params={"id": note_id})).status_code == 200
            assert (await c2.get("/note", params={"id": note_id})).status_code == 404

    def test_injected_store_is_used(self, store):
        app = create_app(store=store)
        assert app.state.store is store


class TestEntryPoint:

    def test_main_serves_module_app(self):
        from notekeeper import __main__ as entry
        from notekeeper.main import app

        with patch.object(entry, "setup_logging") as setup_logging, \
                patch.object(entry, "NoteServer") as server_cls:
            entry.main()

        setup_logging.assert_called_once_with()
        server_cls.assert_called_once_with(app)
        server_cls.return_value.run.assert_called_once_with()
