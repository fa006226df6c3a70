# tests/test_aggregation.py
from directory.aggregation import AggregationConflict, aggregate_regions, assign_slugs
from directory.utils import slugify


def test_slugify():
    assert slugify("Tyne and Wear") == "tyne-and-wear"
    assert slugify("  Bristol, City of!! ") == "bristol-city-of"
    assert slugify("St. Helens--North") == "st-helens-north"
    assert slugify("!!!") == ""


def test_region_counts_and_slugs():
    rows = [("Yorkshire", "Leeds")] * 2 + [("Yorkshire", "York"), ("Kent", "Dover"), ("Kent", "Dover")]
    summary = aggregate_regions(rows, total=5)
    assert summary.counts() == {"Yorkshire": 3, "Kent": 2}
    assert [(r.name, r.count, r.slug) for r in summary.popular()] == [("Yorkshire", 3, "yorkshire"), ("Kent", 2, "kent")]
    assert [r.name for r in summary.alphabetical()] == ["Kent", "Yorkshire"]
    assert summary.conflicts == ()


def test_unknown_region_is_excluded_but_accounted():
    rows = [("Kent", "Dover"), (None, "Leeds"), ("", "York"), ("  ", "Hull")]
    summary = aggregate_regions(rows, total=4)
    assert summary.counts() == {"Kent": 1}
    assert summary.unknown_region_count == 3
    assert summary.regions_total + summary.unknown_region_count == summary.total
    assert summary.is_consistent


def test_inconsistent_total_is_flagged():
    summary = aggregate_regions([("Kent", "Dover")], total=3)
    assert not summary.is_consistent


def test_popular_ties_ordered_by_name():
    summary = aggregate_regions([("Kent", "Dover"), ("Essex", "Harlow")], total=2)
    assert [r.name for r in summary.popular()] == ["Essex", "Kent"]


def test_colliding_region_slugs_are_disambiguated():
    rows = [("Bristol, City of", "Bristol")] * 2 + [("Bristol City of", "Bristol")]
    summary = aggregate_regions(rows, total=3)
    assert summary.counts() == {"Bristol, City of": 2, "Bristol City of": 1}
    slugs = {r.name: r.slug for r in summary.regions}
    assert slugs == {"Bristol City of": "bristol-city-of", "Bristol, City of": "bristol-city-of-2"}
    assert summary.conflicts == (AggregationConflict(slug="bristol-city-of", names=("Bristol City of", "Bristol, City of")),)


def test_suffix_skips_existing_slug():
    slugs, collisions = assign_slugs(["Kent", "KENT", "Kent 2"], fallback="region")
    assert slugs == {"KENT": "kent", "Kent": "kent-3", "Kent 2": "kent-2"}
    assert collisions == [("kent", ("KENT", "Kent"))]


def test_empty_slug_uses_fallback():
    summary = aggregate_regions([("???", "Leeds")], total=1)
    assert summary.regions[0].slug == "region"


def test_city_breakdown():
    rows = [("Kent", "Dover"), ("Kent", "Dover"), ("Kent", "Canterbury"), ("Kent", None)]
    summary = aggregate_regions(rows, total=4)
    kent = summary.find_region("kent")
    assert kent.count == 4
    assert [(c.name, c.count, c.slug) for c in kent.popular_cities()] == [("Dover", 2, "dover"), ("Canterbury", 1, "canterbury")]
    assert summary.city_count == 2


def test_city_collisions_reported_per_region():
    rows = [("Kent", "St Margarets"), ("Kent", "St. Margarets")]
    summary = aggregate_regions(rows, total=2)
    assert summary.conflicts[0].region == "Kent"
    assert {c.slug for c in summary.find_region("kent").cities} == {"st-margarets", "st-margarets-2"}


def test_find_city():
    summary = aggregate_regions([("West Yorkshire", "Leeds")], total=1)
    region, city = summary.find_city("west-yorkshire", "leeds")
    assert (region.name, city.name) == ("West Yorkshire", "Leeds")
    assert summary.find_city("west-yorkshire", "york") is None
    assert summary.find_city("kent", "leeds") is None


def test_reserved_region_slug_is_suffixed_and_reported():
    summary = aggregate_regions([("With Cities", "Leeds")], total=1)
    assert summary.regions[0].slug == "with-cities-2"
    assert summary.conflicts == (AggregationConflict(slug="with-cities", names=("With Cities",)),)


def test_directory_cities_include_unknown_region():
    rows = [("Kent", "Dover"), (None, "Hull"), ("", "Hull"), ("East Riding", "Hull"), (None, None)]
    summary = aggregate_regions(rows, total=5)
    hull = summary.find_directory_city("hull")
    assert (hull.name, hull.count, hull.region) == ("Hull", 3, "East Riding")
    assert summary.find_directory_city("dover").region == "Kent"
    assert summary.city_count == 2


def test_directory_city_without_region():
    summary = aggregate_regions([(None, "Hull")], total=1)
    assert summary.find_directory_city("hull").region is None
