"""Snapshot store interface.

A store exposes two logical record sets:

* **Live**: one snapshot per identifier currently in the catalog, always
  the newest one.
* **Historical**: every superseded snapshot, many per identifier.

All reads are coroutines so independent reads of a single request can be
awaited concurrently. Implementations report read failures as
:class:`~pywtvehicles.exceptions.WtStorageError`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pywtvehicles.models.snapshot import VehicleSnapshot


@runtime_checkable
class SnapshotStore(Protocol):
    async def live_versions(self) -> set[str]:
        """Distinct versions present in the live set."""
        ...

    async def historical_versions(self) -> set[str]:
        """Distinct versions present in the historical set."""
        ...

    async def live_snapshots(self) -> list[VehicleSnapshot]:
        """The whole live set."""
        ...

    async def historical_snapshots(self, up_to: str | None = None) -> list[VehicleSnapshot]:
        """Historical rows with ``version <= up_to`` (all rows when ``None``)."""
        ...

    async def live_snapshot(self, identifier: str) -> VehicleSnapshot | None:
        """Live row for *identifier* (case-insensitive match)."""
        ...

    async def historical_snapshot(self, identifier: str, version: str) -> VehicleSnapshot | None:
        """Historical row for *identifier* with exactly *version*."""
        ...

    async def identifier_versions(self, identifier: str) -> list[str]:
        """Every version (live and historical) at which *identifier* existed."""
        ...
