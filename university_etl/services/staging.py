import asyncio
import csv
import io
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from university_etl.exceptions.custom import DataNotFoundError, StagingError
from university_etl.schemas.university import CanonicalUniversity

logger = logging.getLogger(__name__)

CSV_FIELDS = (
    "name",
    "country",
    "state_province",
    "alpha_two_code",
    "primary_domain",
    "primary_website",
    "last_updated",
)


def render_json(universities: list[CanonicalUniversity]) -> str:
    payload = [u.model_dump(mode="json") for u in universities]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render_csv(universities: list[CanonicalUniversity]) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=CSV_FIELDS, lineterminator="\n")
    writer.writeheader()
    for u in universities:
        row = u.model_dump(mode="json", include=set(CSV_FIELDS))
        writer.writerow({k: "" if row[k] is None else row[k] for k in CSV_FIELDS})
    return buf.getvalue()


def _atomic_write(path: Path, content: str) -> None:
    """Write to a sibling temp file, then swap it into place."""
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class StagingStore:
    def __init__(
        self,
        data_dir: Path,
        json_filename: str = "universities.json",
        csv_filename: str = "universities.csv",
    ):
        self._data_dir = Path(data_dir)
        self.json_path = self._data_dir / json_filename
        self.csv_path = self._data_dir / csv_filename

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def ensure_directory(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)

    def _write_sync(self, universities: list[CanonicalUniversity]) -> None:
        self.ensure_directory()
        json_text = render_json(universities)
        csv_text = render_csv(universities)
        _atomic_write(self.json_path, json_text)
        _atomic_write(self.csv_path, csv_text)

    async def write(self, universities: list[CanonicalUniversity]) -> None:
        """Replace both artifacts with the given records."""
        logger.info("Loading %d universities to %s", len(universities), self._data_dir)
        try:
            await asyncio.to_thread(self._write_sync, universities)
        except OSError as exc:
            logger.error("Failed to save data: %s", exc)
            raise StagingError(str(exc), path=self._data_dir) from exc
        logger.info("Successfully saved %d universities to files", len(universities))

    def _read_json_sync(self) -> list[dict[str, Any]]:
        try:
            text = self.json_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise DataNotFoundError("Data") from exc
        return json.loads(text)

    def _read_csv_sync(self) -> bytes:
        try:
            return self.csv_path.read_bytes()
        except FileNotFoundError as exc:
            raise DataNotFoundError("CSV") from exc

    async def read_json(self) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._read_json_sync)

    async def read_csv(self) -> bytes:
        return await asyncio.to_thread(self._read_csv_sync)
