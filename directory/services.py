# directory/services.py
"""Glue between the record store and the selection/aggregation rules.

Each function performs the store reads for one request and returns plain
snapshots. SQLAlchemy failures surface as `StorageUnavailable`; no partial
results are returned and nothing is retried here.
"""
from contextlib import contextmanager
from typing import Dict, List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from . import config, crud, schemas
from .aggregation import CityAggregate, RegionAggregate, RegionSummary, aggregate_regions
from .errors import ErrorCode, StorageUnavailable
from .filters import ListingPredicate
from .selection import rank_listings, select_listings
from .utils import listing_slug, logger, suffixed

# fixed path segments living beside `/listings/{slug}`
RESERVED_LISTING_SLUGS = frozenset({"count"})


@contextmanager
def storage_errors(code: ErrorCode, action: str):
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception("Record store failure while %s: %s", action, e)
        raise StorageUnavailable(f"Record store failure while {action}", code=code) from e


def _snapshots(rows) -> List[schemas.ListingOut]:
    return [schemas.ListingOut.model_validate(r) for r in rows]


def list_listings(db: Session, predicate: ListingPredicate) -> List[schemas.ListingOut]:
    # eligibility is decided here, so featured queries cannot be truncated by the store
    store_limit = None if predicate.featured else predicate.limit
    with storage_errors(ErrorCode.LISTINGS_UNAVAILABLE, "fetching listings"):
        rows = crud.query_listings(db, predicate, limit=store_limit)
    return select_listings(_snapshots(rows), predicate)


def get_listing(db: Session, slug: str) -> Optional[schemas.ListingOut]:
    with storage_errors(ErrorCode.LISTINGS_UNAVAILABLE, "fetching listing"):
        row = crud.get_listing_by_slug(db, slug)
    return schemas.ListingOut.model_validate(row) if row is not None else None


def count_active(db: Session) -> int:
    with storage_errors(ErrorCode.COUNT_UNAVAILABLE, "counting listings"):
        return crud.count_listings(db)


def region_summary(db: Session) -> RegionSummary:
    with storage_errors(ErrorCode.REGIONS_UNAVAILABLE, "aggregating regions"):
        rows = crud.region_city_rows(db)
        total = crud.count_listings(db)
    return aggregate_regions(rows, total=total)


def _ranked_listings(db: Session, region: Optional[str] = None, city: Optional[str] = None) -> List[schemas.ListingOut]:
    predicate = ListingPredicate(limit=config.LISTINGS_MAX_LIMIT, city=city)
    with storage_errors(ErrorCode.LISTINGS_UNAVAILABLE, "fetching navigation listings"):
        rows = crud.query_listings(db, predicate, limit=predicate.limit, region=region)
    return rank_listings(_snapshots(rows))


def region_detail(db: Session, slug: str) -> Optional[Tuple[RegionAggregate, List[schemas.ListingOut]]]:
    region = region_summary(db).find_region(slug)
    if region is None:
        return None
    return region, _ranked_listings(db, region=region.name)


def city_detail(db: Session, region_slug: str, city_slug: str) -> Optional[Tuple[RegionAggregate, CityAggregate, List[schemas.ListingOut]]]:
    found = region_summary(db).find_city(region_slug, city_slug)
    if found is None:
        return None
    region, city = found
    return region, city, _ranked_listings(db, region=region.name, city=city.name)


def city_by_slug(db: Session, slug: str) -> Optional[Tuple[CityAggregate, List[schemas.ListingOut]]]:
    """Resolve a directory-wide city slug, whatever region its listings have."""
    city = region_summary(db).find_directory_city(slug)
    if city is None:
        return None
    return city, _ranked_listings(db, city=city.name)


def _to_int(value):
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _to_float(value):
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def ingest_listing(db: Session, payload: Dict):
    """Normalize one raw listing dict and upsert it by id."""
    if not payload.get("id"):
        raise ValueError("id missing")
    if not payload.get("name") or not payload.get("city"):
        raise ValueError(f"listing {payload['id']} needs a name and a city")
    # Sanitize numeric fields; anything unusable is stored as unknown
    payload["rating"] = _to_float(payload.get("rating"))
    payload["review_count"] = _to_int(payload.get("review_count"))
    if payload["review_count"] is not None and payload["review_count"] < 0:
        payload["review_count"] = None
    if payload["rating"] is not None and not 0 <= payload["rating"] <= 5:
        payload["rating"] = None
    payload["images"] = [i for i in (payload.get("images") or []) if i]
    payload.setdefault("is_active", True)

    base = payload.get("slug") or listing_slug(payload["name"], payload["city"])
    slug, n = base, 1
    while slug in RESERVED_LISTING_SLUGS or crud.slug_taken(db, slug, exclude_id=payload["id"]):
        n += 1
        slug = suffixed(base, n)
    payload["slug"] = slug

    data = schemas.ListingCreate(**payload).model_dump()
    crud.upsert_listing(db, data)
    logger.info("Ingested listing %s as %s", payload["id"], slug)
    return payload["id"]
