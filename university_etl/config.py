from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    universities_api_url: str = "http://universities.hipolabs.com/search"
    countries: list[str] = ["Costa Rica", "Colombia", "USA"]
    request_timeout: float = 30.0

    data_dir: Path = Path("data")
    json_filename: str = "universities.json"
    csv_filename: str = "universities.csv"

    run_on_startup: bool = True
    scheduler_enabled: bool = True
    refresh_hour_utc: int = 0
    refresh_minute_utc: int = 0

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
