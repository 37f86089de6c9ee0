import httpx
import pytest
from httpx import ASGITransport


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def mock_env(monkeypatch, data_dir):
    monkeypatch.setenv("DATA_DIR", str(data_dir))
    monkeypatch.setenv("COUNTRIES", '["Costa Rica", "Colombia"]')
    monkeypatch.setenv("RUN_ON_STARTUP", "false")
    monkeypatch.setenv("SCHEDULER_ENABLED", "false")


@pytest.fixture
async def client(mock_env):
    from university_etl.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c
