"""Append-only in-memory snapshot store.

Snapshots live in a single log keyed by ``(identifier, version)``. The
live set is not stored separately: it is a derived index pointing each
current identifier at its newest version. Superseding a snapshot only
moves that pointer, so a row becomes historical exactly once and is
never rewritten or deleted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pywtvehicles.exceptions import WtNotFoundError, WtStorageError
from pywtvehicles.models.snapshot import VehicleSnapshot
from pywtvehicles.versions import compare_versions, latest_version, sort_versions, version_key

_logger = logging.getLogger(__name__)


def _as_snapshot(record: VehicleSnapshot | Mapping[str, Any]) -> VehicleSnapshot:
    if isinstance(record, VehicleSnapshot):
        return record
    return VehicleSnapshot.model_validate(dict(record))


class InMemorySnapshotStore:
    """In-memory :class:`~pywtvehicles.store.base.SnapshotStore`.

    Usage::

        store = InMemorySnapshotStore.from_records(live=live_rows, historical=old_rows)
        catalog = await CatalogReconstructor(store).reconstruct("2.31")
    """

    def __init__(self) -> None:
        self._log: dict[tuple[str, str], VehicleSnapshot] = {}
        self._versions: dict[str, list[str]] = {}
        self._current: dict[str, str] = {}
        self._folded: dict[str, str] = {}

    @classmethod
    def from_records(
        cls,
        *,
        live: Iterable[VehicleSnapshot | Mapping[str, Any]] = (),
        historical: Iterable[VehicleSnapshot | Mapping[str, Any]] = (),
    ) -> InMemorySnapshotStore:
        """Build a store from separate live and historical record sets.

        Raises :class:`WtStorageError` when the records break the store
        invariants: two rows of one identifier whose versions compare
        equal (``"2.9"`` and ``"2.09"``), or a live row that is not newer
        than every historical row of its identifier.
        """
        store = cls()
        old_rows = sorted((_as_snapshot(r) for r in historical), key=lambda s: version_key(s.version))
        for snapshot in old_rows:
            store._append(snapshot)
        for record in live:
            store.publish(_as_snapshot(record))
        _logger.debug("Loaded %d snapshots (%d live)", len(store._log), len(store._current))
        return store

    def __len__(self) -> int:
        return len(self._log)

    def _append(self, snapshot: VehicleSnapshot) -> None:
        known = self._versions.get(snapshot.identifier, ())
        if any(compare_versions(snapshot.version, version) == 0 for version in known):
            raise WtStorageError(
                f"Snapshot {snapshot.identifier}@{snapshot.version} already exists",
                operation="append",
            )
        self._log[snapshot.key] = snapshot
        self._versions.setdefault(snapshot.identifier, []).append(snapshot.version)
        self._folded.setdefault(snapshot.identifier.casefold(), snapshot.identifier)

    def publish(self, snapshot: VehicleSnapshot) -> None:
        """Make *snapshot* the live row for its identifier.

        The previous live row, if any, becomes historical. The new
        version must be greater than every version already recorded for
        the identifier.
        """
        newest = latest_version(self._versions.get(snapshot.identifier, ()))
        if newest is not None and compare_versions(snapshot.version, newest) < 0:
            raise WtStorageError(
                f"Snapshot {snapshot.identifier}@{snapshot.version} is not newer than {newest}",
                operation="publish",
            )
        self._append(snapshot)
        self._current[snapshot.identifier] = snapshot.version

    def retire(self, identifier: str) -> None:
        """Drop *identifier* from the live set; its rows stay historical."""
        resolved = self._resolve(identifier)
        if resolved not in self._current:
            raise WtNotFoundError(f"No live snapshot for {identifier!r}", identifier=identifier)
        del self._current[resolved]

    def _resolve(self, identifier: str) -> str:
        if identifier in self._versions:
            return identifier
        return self._folded.get(identifier.casefold(), identifier)

    def _is_live(self, snapshot: VehicleSnapshot) -> bool:
        return self._current.get(snapshot.identifier) == snapshot.version

    # ------------------------------------------------------------------
    # SnapshotStore reads
    # ------------------------------------------------------------------

    async def live_versions(self) -> set[str]:
        return set(self._current.values())

    async def historical_versions(self) -> set[str]:
        return {snapshot.version for snapshot in self._log.values() if not self._is_live(snapshot)}

    async def live_snapshots(self) -> list[VehicleSnapshot]:
        return [self._log[(identifier, version)] for identifier, version in self._current.items()]

    async def historical_snapshots(self, up_to: str | None = None) -> list[VehicleSnapshot]:
        return [
            snapshot
            for snapshot in self._log.values()
            if not self._is_live(snapshot) and (up_to is None or compare_versions(snapshot.version, up_to) <= 0)
        ]

    async def live_snapshot(self, identifier: str) -> VehicleSnapshot | None:
        resolved = self._resolve(identifier)
        version = self._current.get(resolved)
        if version is None:
            return None
        return self._log[(resolved, version)]

    async def historical_snapshot(self, identifier: str, version: str) -> VehicleSnapshot | None:
        resolved = self._resolve(identifier)
        snapshot = self._log.get((resolved, version))
        if snapshot is None or self._is_live(snapshot):
            return None
        return snapshot

    async def identifier_versions(self, identifier: str) -> list[str]:
        return sort_versions(self._versions.get(self._resolve(identifier), ()))
