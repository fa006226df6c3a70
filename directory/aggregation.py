# directory/aggregation.py
"""Roll active listings up into region (county) and city counts.

Every region and city gets a URL slug used as a route segment. Slugs are
unique within their scope: when distinct names collapse to the same slug the
names are sorted, the first keeps the bare slug and the rest receive numeric
suffixes (`-2`, `-3`, ...). Slugs that clash with a fixed route segment are
suffixed the same way. Each such collision is reported as an
`AggregationConflict`; counts are never merged.

Cities are aggregated twice: per region for region pages, and across the
whole directory (including listings without a region) for `/cities/{slug}`.

The grand total is supplied by the caller from a separate count query so it
can be cross-checked against the per-region breakdown.
"""
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple
from .utils import logger, slugify, suffixed

# fixed path segments living beside `/regions/{slug}`
RESERVED_REGION_SLUGS = frozenset({"with-cities"})


@dataclass(frozen=True)
class CityAggregate:
    name: str
    count: int
    slug: str
    # owning region; for directory-wide cities the most common one, if any
    region: Optional[str] = None


@dataclass(frozen=True)
class RegionAggregate:
    name: str
    count: int
    slug: str
    cities: Tuple[CityAggregate, ...] = ()

    def popular_cities(self) -> List[CityAggregate]:
        return sorted(self.cities, key=lambda c: (-c.count, c.name))

    def find_city(self, slug: str) -> Optional[CityAggregate]:
        return next((c for c in self.cities if c.slug == slug), None)


@dataclass(frozen=True)
class AggregationConflict:
    """Distinct names that derived the same slug (or a reserved one)."""
    slug: str
    names: Tuple[str, ...]
    # region the colliding cities belong to; None for region-level and directory-wide collisions
    region: Optional[str] = None
    kind: str = "region"


@dataclass(frozen=True)
class RegionSummary:
    regions: Tuple[RegionAggregate, ...]
    total: int
    unknown_region_count: int
    conflicts: Tuple[AggregationConflict, ...] = field(default=())
    cities: Tuple[CityAggregate, ...] = field(default=())

    def counts(self) -> Dict[str, int]:
        return {r.name: r.count for r in self.regions}

    @property
    def regions_total(self) -> int:
        return sum(self.counts().values())

    @property
    def city_count(self) -> int:
        return len(self.cities)

    @property
    def is_consistent(self) -> bool:
        return self.regions_total + self.unknown_region_count == self.total

    def popular(self) -> List[RegionAggregate]:
        """Regions by listing count, largest first."""
        return sorted(self.regions, key=lambda r: (-r.count, r.name))

    def alphabetical(self) -> List[RegionAggregate]:
        return sorted(self.regions, key=lambda r: (r.name.casefold(), r.name))

    def find_region(self, slug: str) -> Optional[RegionAggregate]:
        return next((r for r in self.regions if r.slug == slug), None)

    def find_city(self, region_slug: str, city_slug: str) -> Optional[Tuple[RegionAggregate, CityAggregate]]:
        region = self.find_region(region_slug)
        if region is None:
            return None
        city = region.find_city(city_slug)
        return (region, city) if city is not None else None

    def find_directory_city(self, slug: str) -> Optional[CityAggregate]:
        return next((c for c in self.cities if c.slug == slug), None)


def _is_blank(value) -> bool:
    return value is None or not str(value).strip()


def assign_slugs(names: Iterable[str], fallback: str, reserved: Iterable[str] = ()) -> Tuple[Dict[str, str], List[Tuple[str, Tuple[str, ...]]]]:
    """Give each distinct name a unique slug.

    Slugs in `reserved` are never handed out bare. Returns the name -> slug
    mapping and a list of `(base_slug, names)` for every base slug shared by
    more than one name or equal to a reserved slug.
    """
    groups = defaultdict(list)
    for name in set(names):
        groups[slugify(name) or fallback].append(name)

    reserved = set(reserved)
    slugs = {}
    taken = set(groups) | reserved
    collisions = []
    for base in sorted(groups):
        members = sorted(groups[base])
        if base in reserved:
            rest = members
        else:
            slugs[members[0]] = base
            rest = members[1:]
        if not rest:
            continue
        collisions.append((base, tuple(members)))
        n = 1
        for name in rest:
            n += 1
            while suffixed(base, n) in taken:
                n += 1
            slugs[name] = suffixed(base, n)
            taken.add(slugs[name])
    return slugs, collisions


def _directory_cities(city_regions: Dict[str, Counter]) -> Tuple[Tuple[CityAggregate, ...], List[AggregationConflict]]:
    slugs, collisions = assign_slugs(city_regions, fallback="city")
    cities = []
    for name, regions in sorted(city_regions.items()):
        known = [(n, r) for r, n in regions.items() if r is not None]
        # most listings wins, then alphabetical
        region = min(known, key=lambda p: (-p[0], p[1]))[1] if known else None
        cities.append(CityAggregate(name=name, count=sum(regions.values()), slug=slugs[name], region=region))
    conflicts = [AggregationConflict(slug=s, names=n, kind="city") for s, n in collisions]
    return tuple(cities), conflicts


def aggregate_regions(
    rows: Iterable[Tuple[Optional[str], Optional[str]]],
    *,
    total: int,
    reserved: Iterable[str] = RESERVED_REGION_SLUGS,
) -> RegionSummary:
    """Aggregate `(region, city)` pairs of active listings.

    `rows` must contain one pair per active listing; `total` is the
    independently counted number of active listings.
    """
    region_counts = Counter()
    city_counts = defaultdict(Counter)
    city_regions = defaultdict(Counter)
    unknown = 0
    for region, city in rows:
        if not _is_blank(city):
            city_regions[city][None if _is_blank(region) else region] += 1
        if _is_blank(region):
            unknown += 1
            continue
        region_counts[region] += 1
        if not _is_blank(city):
            city_counts[region][city] += 1

    region_slugs, region_collisions = assign_slugs(region_counts, fallback="region", reserved=reserved)
    conflicts = [AggregationConflict(slug=s, names=n) for s, n in region_collisions]

    regions = []
    for name, count in region_counts.items():
        city_slugs, city_collisions = assign_slugs(city_counts[name], fallback="city")
        conflicts.extend(AggregationConflict(slug=s, names=n, region=name, kind="city") for s, n in city_collisions)
        cities = tuple(
            CityAggregate(name=c, count=n, slug=city_slugs[c], region=name)
            for c, n in sorted(city_counts[name].items())
        )
        regions.append(RegionAggregate(name=name, count=count, slug=region_slugs[name], cities=cities))

    directory_cities, directory_conflicts = _directory_cities(city_regions)
    conflicts.extend(directory_conflicts)

    for conflict in conflicts:
        logger.warning(
            "Slug collision on %r (%s, region=%r): %s",
            conflict.slug, conflict.kind, conflict.region, ", ".join(conflict.names)
        )

    summary = RegionSummary(
        regions=tuple(sorted(regions, key=lambda r: r.name)),
        total=total,
        unknown_region_count=unknown,
        conflicts=tuple(conflicts),
        cities=directory_cities,
    )
    if not summary.is_consistent:
        logger.warning(
            "Region breakdown (%s + %s unknown) does not match active total %s",
            summary.regions_total, unknown, total
        )
    return summary
