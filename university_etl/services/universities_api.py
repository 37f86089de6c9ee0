import asyncio
import logging
from typing import Any

import httpx

from university_etl.exceptions.custom import UniversitiesAPIError
from university_etl.schemas.university import ExtractResult, SourceResult

logger = logging.getLogger(__name__)

SEARCH_URL = "http://universities.hipolabs.com/search"
DEFAULT_COUNTRIES = ("Costa Rica", "Colombia", "USA")


class UniversitiesAPIService:
    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = SEARCH_URL,
        countries: list[str] | tuple[str, ...] = DEFAULT_COUNTRIES,
    ):
        self._client = client
        self._base_url = base_url
        self._countries = list(countries)

    @property
    def countries(self) -> list[str]:
        return list(self._countries)

    async def _search(self, country: str) -> list[Any]:
        try:
            resp = await self._client.get(self._base_url, params={"country": country})
        except httpx.TimeoutException as exc:
            raise UniversitiesAPIError(f"Request timed out: {exc!r}", country) from exc
        except httpx.HTTPError as exc:
            raise UniversitiesAPIError(f"Request failed: {exc!r}", country) from exc

        if resp.status_code != 200:
            raise UniversitiesAPIError(
                f"Unexpected response status: {resp.status_code}",
                country,
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise UniversitiesAPIError(
                "Response body is not valid JSON", country, status_code=resp.status_code
            ) from exc

        if not isinstance(data, list):
            raise UniversitiesAPIError(
                f"Unexpected response format: {type(data).__name__}",
                country,
                status_code=resp.status_code,
            )
        return data

    async def fetch_country(self, country: str) -> tuple[list[Any] | None, SourceResult]:
        """Fetch one country. Failures are logged and reported, never raised."""
        logger.info("Fetching universities for %s", country)
        try:
            data = await self._search(country)
        except UniversitiesAPIError as exc:
            logger.error(
                "Data extraction failed for %s: %s (status=%s)",
                country, exc.message, exc.status_code,
            )
            return None, SourceResult(country=country, success=False, error=exc.message)

        logger.info("Successfully fetched %d universities for %s", len(data), country)
        return data, SourceResult(country=country, success=True, record_count=len(data))

    async def fetch_all(self) -> ExtractResult:
        """Query every configured country concurrently and join the results."""
        outcomes = await asyncio.gather(
            *(self.fetch_country(c) for c in self._countries)
        )

        records: list[Any] = []
        sources: list[SourceResult] = []
        for data, source in outcomes:
            sources.append(source)
            if data:
                records.extend(data)

        return ExtractResult(records=records, sources=sources)
