"""Catalog queries: stats and single-vehicle lookup."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from pywtvehicles._cache import StatsCache
from pywtvehicles.catalog.aggregation import aggregate
from pywtvehicles.catalog.exclusion import ExclusionFilter
from pywtvehicles.catalog.policy import ReconstructionPolicy
from pywtvehicles.catalog.reconstructor import CatalogReconstructor
from pywtvehicles.config import CatalogConfig
from pywtvehicles.exceptions import WtNotFoundError, WtValidationError
from pywtvehicles.models.requests import StatsRequest, VehicleRequest
from pywtvehicles.models.snapshot import VehicleHistory, VehicleSnapshot
from pywtvehicles.models.stats import CatalogStats
from pywtvehicles.store.base import SnapshotStore
from pywtvehicles.versions import compare_versions, latest_version, merge_version_universe, sort_versions

_logger = logging.getLogger(__name__)

TRequest = TypeVar("TRequest", bound=BaseModel)


def _build_request(model: type[TRequest], **kwargs: Any) -> TRequest:
    try:
        return model(**kwargs)
    except ValidationError as exc:
        error = exc.errors()[0]
        raise WtValidationError(f"Invalid request: {error['msg']}", value=error.get("input")) from exc


class VehicleCatalogService:
    """Read-only queries over a :class:`SnapshotStore`.

    Stats are only cached when the caller passes a :class:`StatsCache`;
    the caller then owns invalidation after new snapshots are published.

    Usage::

        config = CatalogConfig.from_env()
        service = VehicleCatalogService(store, config, cache=StatsCache.from_config(config))
        stats = await service.get_stats("2.31")
        vehicle = await service.get_vehicle("p-51d-30_usaaf_korea")
    """

    def __init__(
        self,
        store: SnapshotStore,
        config: CatalogConfig | None = None,
        *,
        cache: StatsCache | None = None,
    ) -> None:
        self._store = store
        self._config = config or CatalogConfig()
        self._reconstructor = CatalogReconstructor(
            store,
            ReconstructionPolicy(live_fallback=self._config.live_fallback),
        )
        self._exclusion = ExclusionFilter.from_config(self._config)
        self._cache = cache

    @property
    def config(self) -> CatalogConfig:
        return self._config

    @property
    def cache(self) -> StatsCache | None:
        return self._cache

    async def get_stats(self, version: str | None = None) -> CatalogStats:
        """Aggregate statistics for the catalog as of *version*.

        Without a version the live catalog is used. The result always
        lists every known version.

        Raises
        ------
        WtValidationError
            If *version* is not a well-formed version string.
        """
        request = _build_request(StatsRequest, version=version)

        cached = self._cache.get(request.version) if self._cache is not None else None
        if cached is not None:
            _logger.debug("Stats cache hit for version=%s", request.version)
            return cached

        live_versions, historical_versions = await asyncio.gather(
            self._store.live_versions(),
            self._store.historical_versions(),
        )
        versions = merge_version_universe(live_versions, historical_versions)

        catalog = await self._reconstructor.reconstruct(
            request.version,
            live_version=latest_version(live_versions),
        )
        filtered = self._exclusion.apply(catalog)
        stats = aggregate(filtered, versions)
        _logger.debug(
            "Computed stats for version=%s: %d vehicles (%d excluded)",
            request.version,
            len(filtered),
            len(catalog) - len(filtered),
        )

        if self._cache is not None:
            self._cache.put(request.version, stats)
        return stats

    async def get_vehicle(self, identifier: str, version: str | None = None) -> VehicleHistory:
        """Look up one vehicle, live or exactly as it was at *version*.

        Raises
        ------
        WtValidationError
            If *version* is not a well-formed version string.
        WtNotFoundError
            If no matching snapshot exists.
        """
        request = _build_request(VehicleRequest, identifier=identifier, version=version)

        if request.version is None:
            snapshot, history = await asyncio.gather(
                self._store.live_snapshot(request.identifier),
                self._store.identifier_versions(request.identifier),
            )
        else:
            snapshot, history = await asyncio.gather(
                self._snapshot_at(request.identifier, request.version),
                self._store.identifier_versions(request.identifier),
            )

        if snapshot is None:
            raise WtNotFoundError(
                f"Vehicle {request.identifier!r} not found",
                identifier=request.identifier,
                version=request.version,
            )
        return VehicleHistory(snapshot=snapshot, versions=sort_versions([*history, snapshot.version]))

    async def _snapshot_at(self, identifier: str, version: str) -> VehicleSnapshot | None:
        live_version = await self._reconstructor.live_version()
        if live_version is not None and compare_versions(version, live_version) == 0:
            return await self._store.live_snapshot(identifier)

        snapshot = await self._store.historical_snapshot(identifier, version)
        if snapshot is not None:
            return snapshot

        # The live row itself may carry the requested (older) version.
        live = await self._store.live_snapshot(identifier)
        if live is not None and compare_versions(live.version, version) == 0:
            return live
        return None
