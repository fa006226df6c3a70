# directory/api/routes.py
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from .. import schemas, services
from ..aggregation import RegionSummary
from ..db import get_db
from ..errors import StorageUnavailable
from ..filters import resolve_filter

router = APIRouter()


def _error(exc: StorageUnavailable):
    return JSONResponse(status_code=500, content={"error": exc.user_message})


def _conflicts(summary: RegionSummary):
    return [
        {"slug": c.slug, "names": list(c.names), "kind": c.kind, "region": c.region}
        for c in summary.conflicts
    ]


@router.get("/health")
def health():
    return {"status": "ok"}

# raw strings so malformed values fall back to defaults instead of a 422
@router.get("/listings", response_model=schemas.ListingsResponse)
def listings(
    city: str | None = Query(None),
    featured: str | None = Query(None),
    limit: str | None = Query(None),
    db: Session = Depends(get_db)
):
    predicate = resolve_filter(city=city, featured=featured, limit=limit)
    try:
        return {"listings": services.list_listings(db, predicate)}
    except StorageUnavailable as e:
        return _error(e)


@router.get("/listings/count", response_model=schemas.CountResponse)
def listings_count(db: Session = Depends(get_db)):
    try:
        return {"count": services.count_active(db)}
    except StorageUnavailable as e:
        return _error(e)


@router.get("/listings/{slug}", response_model=schemas.ListingOut)
def get_listing(slug: str, db: Session = Depends(get_db)):
    try:
        obj = services.get_listing(db, slug)
    except StorageUnavailable as e:
        return _error(e)
    if not obj:
        raise HTTPException(status_code=404, detail="Listing not found")
    return obj


@router.get("/regions", response_model=schemas.RegionsResponse)
def regions(order: str | None = Query(None), db: Session = Depends(get_db)):
    try:
        summary = services.region_summary(db)
    except StorageUnavailable as e:
        return _error(e)
    rows = summary.alphabetical() if (order or "").lower() == "alpha" else summary.popular()
    return {
        "regions": [{"name": r.name, "count": r.count, "slug": r.slug} for r in rows],
        "conflicts": _conflicts(summary),
    }


@router.get("/regions/with-cities", response_model=schemas.RegionsWithCitiesResponse)
def regions_with_cities(db: Session = Depends(get_db)):
    try:
        summary = services.region_summary(db)
    except StorageUnavailable as e:
        return _error(e)
    return {
        "regions": [
            {
                "name": r.name,
                "count": r.count,
                "slug": r.slug,
                "cities": [{"name": c.name, "count": c.count, "slug": c.slug} for c in r.popular_cities()],
            }
            for r in summary.popular()
        ],
        "conflicts": _conflicts(summary),
    }


@router.get("/regions/{slug}", response_model=schemas.RegionDetailResponse)
def region_detail(slug: str, db: Session = Depends(get_db)):
    try:
        found = services.region_detail(db, slug)
    except StorageUnavailable as e:
        return _error(e)
    if not found:
        raise HTTPException(status_code=404, detail="Region not found")
    region, rows = found
    return {
        "region": region.name,
        "slug": region.slug,
        "listings": rows,
        "cities": [{"name": c.name, "count": c.count, "slug": c.slug} for c in region.popular_cities()],
        "total": region.count,
    }


@router.get("/regions/{region_slug}/{city_slug}", response_model=schemas.CityDetailResponse)
def city_detail(region_slug: str, city_slug: str, db: Session = Depends(get_db)):
    try:
        found = services.city_detail(db, region_slug, city_slug)
    except StorageUnavailable as e:
        return _error(e)
    if not found:
        raise HTTPException(status_code=404, detail="City not found")
    region, city, rows = found
    return {"region": region.name, "city": city.name, "slug": city.slug, "listings": rows, "total": city.count}


@router.get("/stats", response_model=schemas.StatsResponse)
def stats(db: Session = Depends(get_db)):
    try:
        summary = services.region_summary(db)
    except StorageUnavailable as e:
        return _error(e)
    return {
        "total": summary.total,
        "regions": len(summary.regions),
        "cities": summary.city_count,
        "unknown_region_count": summary.unknown_region_count,
        "consistent": summary.is_consistent,
    }


@router.get("/cities/{city_slug}", response_model=schemas.CityPageResponse)
def city_page(city_slug: str, db: Session = Depends(get_db)):
    try:
        found = services.city_by_slug(db, city_slug)
    except StorageUnavailable as e:
        return _error(e)
    if not found:
        raise HTTPException(status_code=404, detail="City not found")
    city, rows = found
    return {"city": city.name, "region": city.region, "slug": city.slug, "listings": rows, "total": city.count}
