from __future__ import annotations

import pytest

from pywtvehicles.exceptions import WtNotFoundError, WtStorageError
from pywtvehicles.models.snapshot import VehicleSnapshot
from pywtvehicles.store import InMemorySnapshotStore, SnapshotStore


def _snap(identifier: str, version: str, **fields: object) -> VehicleSnapshot:
    return VehicleSnapshot.model_validate({"identifier": identifier, "version": version, **fields})


def _store() -> InMemorySnapshotStore:
    return InMemorySnapshotStore.from_records(
        live=[_snap("yak-3", "2.10"), _snap("bf-109f-4", "2.9")],
        historical=[_snap("yak-3", "2.9"), _snap("yak-3", "2.1"), _snap("he-51", "1.9")],
    )


def test_satisfies_protocol() -> None:
    assert isinstance(InMemorySnapshotStore(), SnapshotStore)


@pytest.mark.asyncio
async def test_live_and_historical_split() -> None:
    store = _store()

    assert await store.live_versions() == {"2.10", "2.9"}
    assert await store.historical_versions() == {"2.9", "2.1", "1.9"}
    live = {s.key for s in await store.live_snapshots()}
    assert live == {("yak-3", "2.10"), ("bf-109f-4", "2.9")}
    assert len(store) == 5


@pytest.mark.asyncio
async def test_historical_snapshots_filtered_numerically() -> None:
    store = _store()

    rows = await store.historical_snapshots(up_to="2.9")
    assert {s.key for s in rows} == {("yak-3", "2.9"), ("yak-3", "2.1"), ("he-51", "1.9")}

    rows = await store.historical_snapshots(up_to="2.1")
    assert {s.key for s in rows} == {("yak-3", "2.1"), ("he-51", "1.9")}


@pytest.mark.asyncio
async def test_publish_moves_previous_live_row_to_historical() -> None:
    store = _store()
    store.publish(_snap("yak-3", "2.11"))

    live = await store.live_snapshot("yak-3")
    assert live is not None and live.version == "2.11"
    old = await store.historical_snapshot("yak-3", "2.10")
    assert old is not None and old.version == "2.10"
    assert await store.identifier_versions("yak-3") == ["2.1", "2.9", "2.10", "2.11"]


def test_publish_rejects_older_or_duplicate_version() -> None:
    store = _store()
    with pytest.raises(WtStorageError):
        store.publish(_snap("yak-3", "2.9"))
    with pytest.raises(WtStorageError):
        store.publish(_snap("yak-3", "2.10"))
    with pytest.raises(WtStorageError):
        store.publish(_snap("yak-3", "2.2"))


def test_from_records_rejects_live_older_than_history() -> None:
    with pytest.raises(WtStorageError):
        InMemorySnapshotStore.from_records(live=[_snap("yak-3", "1.0")], historical=[_snap("yak-3", "2.0")])


def test_from_records_rejects_duplicate_historical_rows() -> None:
    with pytest.raises(WtStorageError) as excinfo:
        InMemorySnapshotStore.from_records(historical=[_snap("yak-3", "2.0"), _snap("yak-3", "2.0")])
    assert excinfo.value.operation == "append"


def test_from_records_accepts_plain_dicts() -> None:
    store = InMemorySnapshotStore.from_records(live=[{"identifier": "yak-3", "version": "2.0", "value": "N/A"}])
    assert len(store) == 1


@pytest.mark.asyncio
async def test_single_identifier_lookup_is_case_insensitive() -> None:
    store = _store()

    live = await store.live_snapshot("YAK-3")
    assert live is not None and live.identifier == "yak-3"
    assert await store.historical_snapshot("He-51", "1.9") is not None
    assert await store.identifier_versions("BF-109F-4") == ["2.9"]


@pytest.mark.asyncio
async def test_live_row_is_not_returned_as_historical() -> None:
    store = _store()
    assert await store.historical_snapshot("yak-3", "2.10") is None


@pytest.mark.asyncio
async def test_retire_keeps_rows_as_historical() -> None:
    store = _store()
    store.retire("bf-109f-4")

    assert await store.live_snapshot("bf-109f-4") is None
    assert await store.historical_snapshot("bf-109f-4", "2.9") is not None
    assert "bf-109f-4" not in {s.identifier for s in await store.live_snapshots()}

    with pytest.raises(WtNotFoundError):
        store.retire("bf-109f-4")


@pytest.mark.parametrize("padded", ["2.09", "02.9", "2.009"])
def test_numerically_equal_versions_rejected(padded: str) -> None:
    with pytest.raises(WtStorageError) as excinfo:
        InMemorySnapshotStore.from_records(historical=[_snap("yak-3", "2.9"), _snap("yak-3", padded)])
    assert excinfo.value.operation == "append"


def test_publish_rejects_numerically_equal_live_version() -> None:
    store = _store()
    with pytest.raises(WtStorageError):
        store.publish(_snap("yak-3", "2.010"))
    assert len(store) == 5
