from unittest.mock import patch

import httpx
import respx
from httpx import ASGITransport, Response

from university_etl.exceptions.custom import StagingError
from university_etl.services.universities_api import SEARCH_URL


@respx.mock
async def test_refresh_success(client, data_dir):
    respx.get(SEARCH_URL, params={"country": "Costa Rica"}).mock(
        return_value=Response(
            200,
            json=[{"name": "UCR", "country": "Costa Rica", "web_pages": ["https://ucr.ac.cr"]}],
        )
    )
    respx.get(SEARCH_URL, params={"country": "Colombia"}).mock(
        return_value=Response(200, json=[])
    )

    resp = await client.post("/api/refresh")

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Data refresh completed successfully"
    assert body["recordCount"] == 1
    assert "timestamp" in body
    assert (data_dir / "universities.json").exists()
    assert (data_dir / "universities.csv").exists()


@respx.mock
async def test_refresh_all_countries_failing_is_success(client):
    route = respx.get(SEARCH_URL)
    route.mock(
        return_value=Response(
            200,
            json=[{"name": "UCR", "country": "Costa Rica", "web_pages": ["https://ucr.ac.cr"]}],
        )
    )
    first = await client.post("/api/refresh")
    assert first.json()["recordCount"] == 2

    route.mock(side_effect=httpx.ConnectError("down"))
    second = await client.post("/api/refresh")

    assert second.status_code == 200
    assert second.json()["recordCount"] == 0
    served = await client.get("/api/universities/json")
    assert served.json()["count"] == 0


@respx.mock
async def test_refresh_staging_failure_is_500(client):
    respx.get(SEARCH_URL).mock(
        return_value=Response(
            200,
            json=[{"name": "UCR", "country": "Costa Rica", "web_pages": ["https://ucr.ac.cr"]}],
        )
    )

    with patch(
        "university_etl.services.staging.StagingStore.write",
        side_effect=StagingError("Permission denied"),
    ):
        resp = await client.post("/api/refresh")

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Data refresh failed"
    assert body["details"] == "Permission denied"
    assert "timestamp" in body


@respx.mock
async def test_status_reports_last_run(client):
    respx.get(SEARCH_URL).mock(return_value=Response(200, json=[]))

    before = await client.get("/api/status")
    assert before.json() == {
        "status": "idle",
        "running": False,
        "last_result": None,
        "last_success": None,
        "recent_runs": [],
    }

    await client.post("/api/refresh")
    after = (await client.get("/api/status")).json()

    assert after["status"] == "idle"
    assert after["last_result"]["success"] is True
    assert after["last_result"]["trigger"] == "manual"
    assert len(after["last_result"]["sources"]) == 2


@respx.mock
async def test_status_lists_recent_runs_newest_first(client):
    respx.get(SEARCH_URL).mock(return_value=Response(200, json=[]))

    await client.post("/api/refresh")
    with patch(
        "university_etl.services.staging.StagingStore.write",
        side_effect=StagingError("Permission denied"),
    ):
        await client.post("/api/refresh")

    body = (await client.get("/api/status")).json()

    assert body["last_result"]["success"] is False
    assert body["last_success"]["success"] is True
    assert [r["success"] for r in body["recent_runs"]] == [False, True]

    limited = (await client.get("/api/status", params={"recent": 1})).json()
    assert len(limited["recent_runs"]) == 1


async def test_unknown_path_lists_endpoints(client):
    resp = await client.get("/api/nope")

    assert resp.status_code == 404
    body = resp.json()
    assert body["error"] == "Endpoint not found"
    assert "POST /api/refresh" in body["availableEndpoints"]


async def test_wrong_method_is_404(client):
    resp = await client.get("/api/refresh")

    assert resp.status_code == 404
    assert resp.json()["error"] == "Endpoint not found"


async def test_unhandled_error_is_generic_500(mock_env):
    from university_etl.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as c:
            with patch(
                "university_etl.services.staging.StagingStore.read_json",
                side_effect=RuntimeError("secret internals"),
            ):
                resp = await c.get("/api/universities/json")

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Internal server error"
    assert "secret" not in resp.text
