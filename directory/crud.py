# directory/crud.py
"""Record store access for `Listing` entities.

Read helpers used by the selection and aggregation services plus the
idempotent upsert used by the listing loader. Every public read is
restricted to active listings.
"""
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy import func
from .filters import ListingPredicate
from .models import Listing
from sqlalchemy.orm import Session
from typing import Dict, Any, List, Optional, Tuple

def upsert_listing(db: Session, data: Dict[str, Any]):
    table = Listing.__table__
    insert = pg_insert if db.get_bind().dialect.name == "postgresql" else sqlite_insert
    stmt = insert(table).values(**data)
    # copy all updatable columns from EXCLUDED, but override timestamps
    excluded = {c.name: stmt.excluded[c.name] for c in table.columns
                if c.name in data and c.name not in ("id", "created_at")}
    excluded["updated_at"] = func.now()
    stmt = stmt.on_conflict_do_update(index_elements=['id'], set_=excluded)
    db.execute(stmt)
    db.commit()

def get_listing(db: Session, listing_id: str):
    return db.query(Listing).filter(Listing.id == listing_id).first()

def get_listing_by_slug(db: Session, slug: str):
    return db.query(Listing).filter(Listing.slug == slug, Listing.is_active.is_(True)).first()

def slug_taken(db: Session, slug: str, exclude_id: Optional[str] = None) -> bool:
    q = db.query(Listing.id).filter(Listing.slug == slug)
    if exclude_id is not None:
        q = q.filter(Listing.id != exclude_id)
    return db.query(q.exists()).scalar()

def id_ordering(dialect_name: str):
    # code-point order, matching the Python tie-break in selection.rank_listings
    if dialect_name == "postgresql":
        return Listing.id.collate("C").asc()
    return Listing.id.asc()

def query_listings(
    db: Session,
    predicate: ListingPredicate,
    order_by_rating: bool = True,
    limit: Optional[int] = None,
    region: Optional[str] = None,
) -> List[Listing]:
    q = db.query(Listing).filter(Listing.is_active.is_(predicate.active))
    if predicate.city is not None:
        q = q.filter(Listing.city == predicate.city)
    if region is not None:
        q = q.filter(Listing.region == region)
    if order_by_rating:
        q = q.order_by(Listing.rating.desc().nulls_last(), id_ordering(db.get_bind().dialect.name))
    if limit is not None:
        q = q.limit(limit)
    return q.all()

def count_listings(db: Session) -> int:
    return db.query(func.count(Listing.id)).filter(Listing.is_active.is_(True)).scalar() or 0

def region_city_rows(db: Session) -> List[Tuple[Optional[str], Optional[str]]]:
    rows = db.query(Listing.region, Listing.city).filter(Listing.is_active.is_(True)).all()
    return [(r.region, r.city) for r in rows]
