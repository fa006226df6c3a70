# tests/test_selection.py
import pytest
from directory.filters import ListingPredicate
from directory.selection import is_featured, rank_listings, select_listings


def test_featured_listing(snapshot):
    assert is_featured(snapshot("a"))


@pytest.mark.parametrize("rating,expected", [(4.5, True), (4.49, False), (5.0, True), (None, False)])
def test_rating_threshold(snapshot, rating, expected):
    assert is_featured(snapshot("a", rating=rating)) is expected


@pytest.mark.parametrize("reviews,expected", [(10, True), (9, False), (0, False), (None, False)])
def test_review_count_threshold(snapshot, reviews, expected):
    assert is_featured(snapshot("a", review_count=reviews)) is expected


@pytest.mark.parametrize("website", [None, "", "   "])
def test_needs_website(snapshot, website):
    assert not is_featured(snapshot("a", website=website))


def test_needs_images(snapshot):
    assert not is_featured(snapshot("a", images=[]))


def test_thresholds_can_be_overridden(snapshot):
    listing = snapshot("a", rating=4.0, review_count=3)
    assert not is_featured(listing)
    assert is_featured(listing, min_rating=4.0, min_reviews=3)


def test_rank_ties_broken_by_id(snapshot):
    rows = [snapshot("c", rating=4.2), snapshot("b", rating=4.9), snapshot("a", rating=4.9), snapshot("d", rating=None)]
    assert [r.id for r in rank_listings(rows)] == ["a", "b", "c", "d"]


def test_limit_two_returns_both_top_rated(snapshot):
    rows = [snapshot("x", rating=4.9), snapshot("y", rating=4.2), snapshot("w", rating=4.9)]
    predicate = ListingPredicate(limit=2)
    first = [r.id for r in select_listings(rows, predicate)]
    assert first == ["w", "x"]
    assert [r.id for r in select_listings(list(reversed(rows)), predicate)] == first


def test_featured_is_a_filter_not_a_boost(snapshot):
    rows = [snapshot("a", rating=4.9, images=[]), snapshot("b", rating=4.6), snapshot("c", rating=4.4)]
    result = select_listings(rows, ListingPredicate(limit=12, featured=True))
    assert [r.id for r in result] == ["b"]


def test_select_never_returns_inactive(snapshot):
    rows = [snapshot("a", is_active=False), snapshot("b")]
    assert [r.id for r in select_listings(rows, ListingPredicate(limit=12))] == ["b"]


def test_select_applies_city(snapshot):
    rows = [snapshot("a", city="York"), snapshot("b", city="Leeds")]
    assert [r.id for r in select_listings(rows, ListingPredicate(limit=12, city="York"))] == ["a"]
