# directory/selection.py
"""Featured eligibility and result ordering.

Both rules work on any object exposing the listing attributes (ORM rows or
`schemas.ListingOut` snapshots).
"""
from typing import Iterable, List
from . import config
from .filters import ListingPredicate


def is_featured(listing, *, min_rating: float = None, min_reviews: int = None) -> bool:
    """Return True when the listing qualifies for promoted views.

    A featured listing has a website, at least one image, a rating of at
    least `min_rating` and at least `min_reviews` reviews. A missing rating
    or review count never qualifies.
    """
    min_rating = config.FEATURED_MIN_RATING if min_rating is None else min_rating
    min_reviews = config.FEATURED_MIN_REVIEWS if min_reviews is None else min_reviews
    if not (listing.website or "").strip():
        return False
    if not listing.images:
        return False
    if listing.rating is None or float(listing.rating) < min_rating:
        return False
    if listing.review_count is None or listing.review_count < min_reviews:
        return False
    return True


def _rank_key(listing):
    # rating desc, unrated last, then id asc
    rated = listing.rating is not None
    return (not rated, -float(listing.rating) if rated else 0.0, str(listing.id))


def rank_listings(listings: Iterable) -> List:
    return sorted(listings, key=_rank_key)


def select_listings(listings: Iterable, predicate: ListingPredicate) -> List:
    """Apply the featured filter, ranking and truncation for one query."""
    rows = [row for row in listings if row.is_active]
    if predicate.city is not None:
        rows = [row for row in rows if row.city == predicate.city]
    if predicate.featured:
        rows = [row for row in rows if is_featured(row)]
    return rank_listings(rows)[:predicate.limit]
