"""Economic and classification statistics over a catalog.

Every vehicle is counted in ``categories`` and in its country/type
breakdown. The money totals follow three independent rules:

* tech-tree (not premium, not on the marketplace, not a pack): adds
  silver lions and research points;
* premium: counts towards ``total_premium_vehicles``;
* premium, not a pack, not on the marketplace: adds golden eagles.

Unparseable or missing economic fields count as zero.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from pywtvehicles._normalize import int_or_zero
from pywtvehicles.models.snapshot import VehicleSnapshot
from pywtvehicles.models.stats import CatalogStats, CountryStats, VehicleTypeStats


def is_techtree(snapshot: VehicleSnapshot) -> bool:
    return not snapshot.is_premium and not snapshot.on_marketplace and not snapshot.is_pack


def contributes_ge(snapshot: VehicleSnapshot) -> bool:
    return snapshot.is_premium and not snapshot.is_pack and not snapshot.on_marketplace


@dataclass(slots=True)
class _TypeTotals:
    count: int = 0
    total_value: int = 0
    total_req_exp: int = 0
    total_ge_cost: int = 0

    def merge(self, other: _TypeTotals) -> None:
        self.count += other.count
        self.total_value += other.total_value
        self.total_req_exp += other.total_req_exp
        self.total_ge_cost += other.total_ge_cost

    def build(self) -> VehicleTypeStats:
        return VehicleTypeStats(
            count=self.count,
            total_value=self.total_value,
            total_req_exp=self.total_req_exp,
            total_ge_cost=self.total_ge_cost,
        )


@dataclass(slots=True)
class _CountryTotals:
    country: str
    total_vehicles: int = 0
    total_value: int = 0
    total_req_exp: int = 0
    total_ge_cost: int = 0
    vehicle_types: dict[str, _TypeTotals] = field(default_factory=dict)

    def type_totals(self, vehicle_type: str) -> _TypeTotals:
        totals = self.vehicle_types.get(vehicle_type)
        if totals is None:
            totals = _TypeTotals()
            self.vehicle_types[vehicle_type] = totals
        return totals

    def merge(self, other: _CountryTotals) -> None:
        self.total_vehicles += other.total_vehicles
        self.total_value += other.total_value
        self.total_req_exp += other.total_req_exp
        self.total_ge_cost += other.total_ge_cost
        for vehicle_type, totals in other.vehicle_types.items():
            self.type_totals(vehicle_type).merge(totals)

    def build(self) -> CountryStats:
        return CountryStats(
            country=self.country,
            total_vehicles=self.total_vehicles,
            total_value=self.total_value,
            total_req_exp=self.total_req_exp,
            total_ge_cost=self.total_ge_cost,
            vehicle_types={name: totals.build() for name, totals in self.vehicle_types.items()},
        )


@dataclass
class StatsAccumulator:
    """Running totals for one pass over a catalog.

    Accumulators over disjoint sets of vehicles can be combined with
    :meth:`merge`; the result equals a single pass over the union.
    """

    total_techtree_vehicles: int = 0
    total_premium_vehicles: int = 0
    total_sl_required: int = 0
    total_rp_required: int = 0
    total_ge_required: int = 0
    categories: dict[str, int] = field(default_factory=dict)
    countries: dict[str, _CountryTotals] = field(default_factory=dict)

    def _country_totals(self, country: str) -> _CountryTotals:
        totals = self.countries.get(country)
        if totals is None:
            totals = _CountryTotals(country=country)
            self.countries[country] = totals
        return totals

    def add(self, snapshot: VehicleSnapshot) -> None:
        country = self._country_totals(snapshot.country)
        type_totals = country.type_totals(snapshot.vehicle_type)

        country.total_vehicles += 1
        type_totals.count += 1
        self.categories[snapshot.vehicle_type] = self.categories.get(snapshot.vehicle_type, 0) + 1

        if is_techtree(snapshot):
            value = int_or_zero(snapshot.value)
            req_exp = int_or_zero(snapshot.req_exp)
            self.total_techtree_vehicles += 1
            self.total_sl_required += value
            self.total_rp_required += req_exp
            country.total_value += value
            country.total_req_exp += req_exp
            type_totals.total_value += value
            type_totals.total_req_exp += req_exp

        if snapshot.is_premium:
            self.total_premium_vehicles += 1

        if contributes_ge(snapshot):
            ge_cost = int_or_zero(snapshot.ge_cost)
            self.total_ge_required += ge_cost
            country.total_ge_cost += ge_cost
            type_totals.total_ge_cost += ge_cost

    def merge(self, other: StatsAccumulator) -> StatsAccumulator:
        self.total_techtree_vehicles += other.total_techtree_vehicles
        self.total_premium_vehicles += other.total_premium_vehicles
        self.total_sl_required += other.total_sl_required
        self.total_rp_required += other.total_rp_required
        self.total_ge_required += other.total_ge_required
        for vehicle_type, count in other.categories.items():
            self.categories[vehicle_type] = self.categories.get(vehicle_type, 0) + count
        for country, totals in other.countries.items():
            self._country_totals(country).merge(totals)
        return self

    def build(self, versions: Iterable[str] = ()) -> CatalogStats:
        return CatalogStats(
            total_techtree_vehicles=self.total_techtree_vehicles,
            total_premium_vehicles=self.total_premium_vehicles,
            total_sl_required=self.total_sl_required,
            total_rp_required=self.total_rp_required,
            total_ge_required=self.total_ge_required,
            categories=dict(self.categories),
            countries=[totals.build() for totals in self.countries.values()],
            versions=list(versions),
        )


def _snapshots(catalog: Mapping[str, VehicleSnapshot] | Iterable[VehicleSnapshot]) -> Iterable[VehicleSnapshot]:
    if isinstance(catalog, Mapping):
        return catalog.values()
    return catalog


def aggregate(
    catalog: Mapping[str, VehicleSnapshot] | Iterable[VehicleSnapshot],
    versions: Iterable[str] = (),
) -> CatalogStats:
    """Compute :class:`CatalogStats` in a single pass over *catalog*."""
    accumulator = StatsAccumulator()
    for snapshot in _snapshots(catalog):
        accumulator.add(snapshot)
    return accumulator.build(versions)


def aggregate_by_country(
    catalog: Mapping[str, VehicleSnapshot] | Iterable[VehicleSnapshot],
    versions: Iterable[str] = (),
) -> CatalogStats:
    """Aggregate each country bucket separately, then merge the buckets.

    Produces the same result as :func:`aggregate`; the buckets are
    independent, so callers may compute them in separate workers.
    """
    buckets: dict[str, StatsAccumulator] = {}
    for snapshot in _snapshots(catalog):
        bucket = buckets.get(snapshot.country)
        if bucket is None:
            bucket = StatsAccumulator()
            buckets[snapshot.country] = bucket
        bucket.add(snapshot)

    merged = StatsAccumulator()
    for bucket in buckets.values():
        merged.merge(bucket)
    return merged.build(versions)
