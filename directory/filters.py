# directory/filters.py
"""Turn raw query parameters into a `ListingPredicate`.

Parsing is permissive: malformed values fall back to defaults instead of
being rejected.
"""
from dataclasses import dataclass
from typing import Optional
from . import config
from .utils import logger

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


@dataclass(frozen=True)
class ListingPredicate:
    """Read constraints handed to the record store.

    `active` is always True; there is no way to construct a public query over
    inactive listings through `resolve_filter`.
    """
    limit: int
    city: Optional[str] = None
    featured: bool = False
    active: bool = True


def parse_limit(raw, default: int = None, maximum: int = None) -> int:
    default = config.LISTINGS_DEFAULT_LIMIT if default is None else default
    maximum = config.LISTINGS_MAX_LIMIT if maximum is None else maximum
    if raw is None or raw == "":
        return default
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        logger.debug("Unparseable limit %r, using default %s", raw, default)
        return default
    if value <= 0:
        logger.debug("Non-positive limit %s, using default %s", value, default)
        return default
    return min(value, maximum)


def parse_flag(raw) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    value = str(raw).strip().lower()
    if value in _TRUE:
        return True
    if value not in _FALSE:
        logger.debug("Unknown flag value %r, treating as false", raw)
    return False


def resolve_filter(city=None, featured=None, limit=None, *, default_limit: int = None, max_limit: int = None) -> ListingPredicate:
    if not isinstance(city, str) or not city.strip():
        city = None
    return ListingPredicate(
        limit=parse_limit(limit, default=default_limit, maximum=max_limit),
        city=city,
        featured=parse_flag(featured),
    )
