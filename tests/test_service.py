from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from pywtvehicles._cache import StatsCache
from pywtvehicles.config import CatalogConfig
from pywtvehicles.exceptions import WtNotFoundError, WtStorageError, WtValidationError
from pywtvehicles.models.snapshot import VehicleSnapshot
from pywtvehicles.service import VehicleCatalogService
from pywtvehicles.store import InMemorySnapshotStore


def _snap(identifier: str, version: str, **fields: object) -> VehicleSnapshot:
    record: dict[str, object] = {
        "identifier": identifier,
        "version": version,
        "country": "country_usa",
        "vehicle_type": "fighter",
    }
    record.update(fields)
    return VehicleSnapshot.model_validate(record)


def _store() -> InMemorySnapshotStore:
    return InMemorySnapshotStore.from_records(
        live=[
            _snap("p-51", "2.10", value=2500, req_exp=600),
            _snap("p-47_prem", "2.10", is_premium=True, ge_cost=1500),
            _snap("f6f-5_killstreak", "2.10", value=9999),
            _snap("event_tiger", "2.10", value=8888),
            _snap("b-17", "2.9", vehicle_type="bomber", value=4000, req_exp=900),
        ],
        historical=[
            _snap("p-51", "2.9", value=2000, req_exp=500),
            _snap("p-51", "1.10", value=1500, req_exp=400),
            _snap("p-47_prem", "2.2", is_premium=True, ge_cost=1200),
            _snap("event_tiger", "2.9", value=7777),
        ],
    )


def _service(
    store: object | None = None,
    *,
    cache: StatsCache | None = None,
    **config: object,
) -> VehicleCatalogService:
    settings: dict[str, object] = {"excluded_identifiers": frozenset({"event_tiger"})}
    settings.update(config)
    return VehicleCatalogService(
        store if store is not None else _store(),  # type: ignore[arg-type]
        CatalogConfig(**settings),  # type: ignore[arg-type]
        cache=cache,
    )


@dataclass
class RecordingStore:
    """Store double that records every read and can be told to fail."""

    inner: InMemorySnapshotStore = field(default_factory=_store)
    calls: list[str] = field(default_factory=list)
    fail_on: set[str] = field(default_factory=set)

    async def _read(self, name: str, *args: object) -> object:
        self.calls.append(name)
        if name in self.fail_on:
            raise WtStorageError(f"{name} failed", operation=name)
        return await getattr(self.inner, name)(*args)

    async def live_versions(self) -> set[str]:
        return await self._read("live_versions")  # type: ignore[return-value]

    async def historical_versions(self) -> set[str]:
        return await self._read("historical_versions")  # type: ignore[return-value]

    async def live_snapshots(self) -> list[VehicleSnapshot]:
        return await self._read("live_snapshots")  # type: ignore[return-value]

    async def historical_snapshots(self, up_to: str | None = None) -> list[VehicleSnapshot]:
        return await self._read("historical_snapshots", up_to)  # type: ignore[return-value]

    async def live_snapshot(self, identifier: str) -> VehicleSnapshot | None:
        return await self._read("live_snapshot", identifier)  # type: ignore[return-value]

    async def historical_snapshot(self, identifier: str, version: str) -> VehicleSnapshot | None:
        return await self._read("historical_snapshot", identifier, version)  # type: ignore[return-value]

    async def identifier_versions(self, identifier: str) -> list[str]:
        return await self._read("identifier_versions", identifier)  # type: ignore[return-value]


# ------------------------------------------------------------------
# get_stats
# ------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_current_stats_exclude_event_and_reward_vehicles() -> None:
    stats = await _service().get_stats()

    assert stats.total_techtree_vehicles == 2
    assert stats.total_premium_vehicles == 1
    assert stats.total_sl_required == 6500
    assert stats.total_rp_required == 1500
    assert stats.total_ge_required == 1500
    assert stats.categories == {"fighter": 2, "bomber": 1}
    assert stats.versions == ["1.10", "2.2", "2.9", "2.10"]


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_past_stats_use_historical_rows() -> None:
    stats = await _service().get_stats("2.9")

    # p-51@2.9 and p-47_prem@2.2; b-17 only has a live row
    assert stats.total_techtree_vehicles == 1
    assert stats.total_sl_required == 2000
    assert stats.total_premium_vehicles == 1
    assert stats.total_ge_required == 1200
    assert stats.versions == ["1.10", "2.2", "2.9", "2.10"]


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_past_stats_with_live_fallback() -> None:
    stats = await _service(live_fallback=True).get_stats("2.9")

    assert stats.total_techtree_vehicles == 2
    assert stats.total_sl_required == 6000


@pytest.mark.asyncio
async def test_version_with_no_vehicles_yields_zero_stats() -> None:
    stats = await _service().get_stats("1.0")

    assert stats.total_techtree_vehicles == 0
    assert stats.countries == []
    assert stats.versions == ["1.10", "2.2", "2.9", "2.10"]


@pytest.mark.asyncio
async def test_invalid_version_fails_before_any_read() -> None:
    store = RecordingStore()
    with pytest.raises(WtValidationError) as excinfo:
        await _service(store).get_stats("abc")

    assert excinfo.value.value == "abc"
    assert store.calls == []


@pytest.mark.asyncio
async def test_stats_are_cached_until_invalidated() -> None:
    store = RecordingStore()
    cache = StatsCache(ttl=60.0)
    service = _service(store, cache=cache)

    first = await service.get_stats("2.9")
    reads = len(store.calls)
    second = await service.get_stats("2.9")

    assert second == first
    assert len(store.calls) == reads

    cache.invalidate()
    await service.get_stats("2.9")
    assert len(store.calls) > reads


@pytest.mark.asyncio
async def test_no_caching_without_a_caller_owned_cache() -> None:
    store = RecordingStore()
    service = _service(store)

    assert service.cache is None
    await service.get_stats()
    reads = len(store.calls)
    await service.get_stats()
    assert len(store.calls) == 2 * reads


@pytest.mark.asyncio
async def test_stats_follow_newly_published_live_rows() -> None:
    store = _store()
    service = _service(store)

    before = await service.get_stats()
    store.publish(_snap("p-51", "2.11", value=999, req_exp=600))
    after = await service.get_stats()

    assert before.total_sl_required == 6500
    assert after.total_sl_required == 4999
    assert after.versions == ["1.10", "2.2", "2.9", "2.10", "2.11"]


@pytest.mark.asyncio
async def test_storage_errors_propagate_unchanged() -> None:
    store = RecordingStore(fail_on={"historical_versions"})
    with pytest.raises(WtStorageError) as excinfo:
        await _service(store).get_stats()
    assert excinfo.value.operation == "historical_versions"


# ------------------------------------------------------------------
# get_vehicle
# ------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_live_vehicle_with_history() -> None:
    result = await _service().get_vehicle("p-51")

    assert result.snapshot.version == "2.10"
    assert result.snapshot.value == 2500
    assert result.versions == ["1.10", "2.9", "2.10"]


@pytest.mark.asyncio
async def test_vehicle_lookup_is_case_insensitive() -> None:
    result = await _service().get_vehicle("P-51")
    assert result.snapshot.identifier == "p-51"


@pytest.mark.asyncio
async def test_vehicle_at_live_version_returns_live_row() -> None:
    result = await _service().get_vehicle("b-17", "2.10")
    assert result.snapshot.version == "2.9"


@pytest.mark.asyncio
async def test_vehicle_at_past_version_returns_exact_historical_row() -> None:
    result = await _service().get_vehicle("p-51", "1.10")

    assert result.snapshot.version == "1.10"
    assert result.snapshot.value == 1500
    assert result.versions == ["1.10", "2.9", "2.10"]


@pytest.mark.asyncio
async def test_vehicle_at_its_own_live_row_version() -> None:
    result = await _service().get_vehicle("b-17", "2.9")
    assert result.snapshot.version == "2.9"


@pytest.mark.asyncio
async def test_vehicle_at_version_without_snapshot_not_found() -> None:
    with pytest.raises(WtNotFoundError) as excinfo:
        await _service().get_vehicle("p-51", "2.2")
    assert excinfo.value.identifier == "p-51"
    assert excinfo.value.version == "2.2"


@pytest.mark.asyncio
async def test_unknown_vehicle_not_found() -> None:
    with pytest.raises(WtNotFoundError):
        await _service().get_vehicle("ghost-id")


@pytest.mark.asyncio
async def test_vehicle_with_invalid_version_fails_before_any_read() -> None:
    store = RecordingStore()
    with pytest.raises(WtValidationError):
        await _service(store).get_vehicle("p-51", "latest")
    assert store.calls == []


@pytest.mark.asyncio
async def test_vehicle_with_blank_identifier_rejected() -> None:
    with pytest.raises(WtValidationError):
        await _service().get_vehicle("   ")
