"""Rebuild the catalog as it existed at a given version."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from pywtvehicles.catalog.policy import ReconstructionPolicy, is_visible_at, supersedes
from pywtvehicles.models.snapshot import VehicleSnapshot
from pywtvehicles.store.base import SnapshotStore
from pywtvehicles.versions import compare_versions, latest_version

_logger = logging.getLogger(__name__)

Catalog = dict[str, VehicleSnapshot]


def select_as_of(snapshots: Iterable[VehicleSnapshot]) -> Catalog:
    """Keep the newest snapshot per identifier.

    The input is assumed to be pre-filtered to rows visible at the
    target version; the result maps each identifier to the snapshot that
    had not yet been superseded at that point.
    """
    catalog: Catalog = {}
    for snapshot in snapshots:
        if supersedes(snapshot, catalog.get(snapshot.identifier)):
            catalog[snapshot.identifier] = snapshot
    return catalog


class CatalogReconstructor:
    """Merge live and historical rows into a single coherent catalog."""

    def __init__(self, store: SnapshotStore, policy: ReconstructionPolicy | None = None) -> None:
        self._store = store
        self._policy = policy or ReconstructionPolicy()

    @property
    def policy(self) -> ReconstructionPolicy:
        return self._policy

    async def live_version(self) -> str | None:
        """The current live catalog version (``None`` for an empty store)."""
        return latest_version(await self._store.live_versions())

    async def reconstruct(
        self,
        target_version: str | None = None,
        *,
        live_version: str | None = None,
    ) -> Catalog:
        """Return ``identifier → snapshot`` as visible at *target_version*.

        Without a target the live set is returned as-is and no historical
        row is read. *live_version* may be passed when the caller already
        resolved it, saving one store read.
        """
        if target_version is None:
            _logger.debug("Reconstructing current catalog from live set")
            return select_as_of(await self._store.live_snapshots())

        if live_version is None:
            live_version = await self.live_version()
        if live_version is not None and compare_versions(target_version, live_version) == 0:
            _logger.debug("Target version %s is live; using live set", target_version)
            return select_as_of(await self._store.live_snapshots())

        if self._policy.live_fallback:
            live, historical = await asyncio.gather(
                self._store.live_snapshots(),
                self._store.historical_snapshots(up_to=target_version),
            )
            candidates = [s for s in live if is_visible_at(s, target_version)]
            candidates.extend(historical)
        else:
            candidates = await self._store.historical_snapshots(up_to=target_version)

        catalog = select_as_of(s for s in candidates if is_visible_at(s, target_version))
        _logger.debug(
            "Reconstructed %d vehicles at version %s from %d candidate rows",
            len(catalog),
            target_version,
            len(candidates),
        )
        return catalog
