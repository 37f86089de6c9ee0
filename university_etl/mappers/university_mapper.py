"""Pure functions that turn raw directory records into canonical universities.

No I/O. The only side effect is a summary log line per batch.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from university_etl.schemas.university import (
    CanonicalUniversity,
    RawUniversity,
    TransformResult,
)

logger = logging.getLogger(__name__)

# The API spells it with a hyphen; canonical records use an underscore.
_STATE_KEYS = ("state-province", "state_province")


def _clean(value: Any) -> str:
    return str(value).strip()


def _clean_optional(value: Any) -> str | None:
    return _clean(value) if value else None


def _clean_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [_clean(v) for v in value]


def _state_province(raw: RawUniversity) -> Any:
    for key in _STATE_KEYS:
        if raw.get(key):
            return raw[key]
    return None


def has_required_fields(raw: Any) -> bool:
    """Intake check: name, country and at least one web page."""
    if not isinstance(raw, dict):
        return False
    web_pages = raw.get("web_pages")
    return bool(
        raw.get("name")
        and raw.get("country")
        and isinstance(web_pages, list)
        and len(web_pages) > 0
    )


def is_valid(university: CanonicalUniversity) -> bool:
    """Final check after coercion, which may have produced empty strings."""
    return bool(university.name and university.country and university.web_pages)


def to_canonical(raw: RawUniversity, last_updated: datetime) -> CanonicalUniversity:
    domains = _clean_list(raw.get("domains"))
    web_pages = _clean_list(raw.get("web_pages"))
    return CanonicalUniversity(
        name=_clean(raw.get("name")),
        country=_clean(raw.get("country")),
        state_province=_clean_optional(_state_province(raw)),
        alpha_two_code=_clean_optional(raw.get("alpha_two_code")),
        domains=domains,
        web_pages=web_pages,
        primary_domain=domains[0] if domains else None,
        primary_website=web_pages[0] if web_pages else None,
        last_updated=last_updated,
    )


def normalize_universities(
    raw_records: list[Any],
    now: datetime | None = None,
) -> TransformResult:
    """Filter and normalize a batch of raw records.

    Every record in the batch gets the same ``last_updated`` stamp. Order is
    preserved and nothing is deduplicated.
    """
    stamp = now or datetime.now(timezone.utc)

    candidates = [r for r in raw_records if has_required_fields(r)]
    universities = [to_canonical(r, stamp) for r in candidates]
    universities = [u for u in universities if is_valid(u)]

    logger.info(
        "Transformed %d universities (filtered from %d)",
        len(universities), len(raw_records),
    )
    if len(candidates) != len(universities):
        logger.debug(
            "%d records became invalid after trimming",
            len(candidates) - len(universities),
        )

    return TransformResult(records=universities, received=len(raw_records))
