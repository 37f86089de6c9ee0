from pathlib import Path

from university_etl.config import Settings


def test_defaults(monkeypatch):
    for var in ("DATA_DIR", "COUNTRIES", "RUN_ON_STARTUP", "SCHEDULER_ENABLED"):
        monkeypatch.delenv(var, raising=False)

    settings = Settings(_env_file=None)

    assert settings.universities_api_url == "http://universities.hipolabs.com/search"
    assert settings.countries == ["Costa Rica", "Colombia", "USA"]
    assert settings.data_dir == Path("data")
    assert settings.json_filename == "universities.json"
    assert settings.csv_filename == "universities.csv"
    assert settings.run_on_startup is True
    assert settings.refresh_hour_utc == 0
    assert settings.port == 3000


def test_env_overrides(mock_env, data_dir):
    settings = Settings(_env_file=None)

    assert settings.data_dir == data_dir
    assert settings.countries == ["Costa Rica", "Colombia"]
    assert settings.run_on_startup is False
    assert settings.scheduler_enabled is False
