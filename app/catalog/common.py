import math
from datetime import date
from typing import Iterable, Sequence, TypeVar

from app.schemas.common import Pagination

T = TypeVar("T")

EARTH_RADIUS_KM = 6371.0
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def contains_ci(haystack: str | None, needle: str) -> bool:
    return needle.strip().lower() in (haystack or "").lower()


def any_contains_ci(values: Iterable[str], needle: str) -> bool:
    return any(contains_ci(v, needle) for v in values)


def split_csv(raw: str | None) -> list[str]:
    return [p.strip() for p in (raw or "").split(",") if p.strip()]


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometres on a spherical Earth."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def span_days(start: date | None, end: date | None) -> int:
    """Billable days/nights between two dates; at least one."""
    if not start or not end:
        return 1
    return max(1, (end - start).days)


def paginate(items: Sequence[T], page: int = 1, limit: int = DEFAULT_LIMIT) -> tuple[list[T], Pagination]:
    """1-indexed slice; a page past the end is empty, never an error."""
    page = max(1, page)
    limit = max(1, min(limit, MAX_LIMIT))
    start = (page - 1) * limit
    return list(items[start:start + limit]), Pagination.build(page, limit, len(items))
