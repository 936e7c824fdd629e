"""pywtvehicles - Point-in-time catalog of revised game vehicles."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pywtvehicles")
except PackageNotFoundError:
    __version__ = "0+local"
from pywtvehicles._cache import StatsCache
from pywtvehicles.catalog import (
    CatalogReconstructor,
    ExclusionFilter,
    ReconstructionPolicy,
    StatsAccumulator,
    aggregate,
)
from pywtvehicles.config import CatalogConfig
from pywtvehicles.exceptions import (
    WtConfigError,
    WtError,
    WtNotFoundError,
    WtStorageError,
    WtValidationError,
)
from pywtvehicles.models import (
    CatalogStats,
    CountryStats,
    VehicleHistory,
    VehicleSnapshot,
    VehicleTypeStats,
)
from pywtvehicles.service import VehicleCatalogService
from pywtvehicles.store import InMemorySnapshotStore, SnapshotStore
from pywtvehicles.versions import (
    is_valid_version,
    latest_version,
    merge_version_universe,
    sort_versions,
    validate_version,
)

__all__ = [
    "__version__",
    "CatalogConfig",
    "CatalogReconstructor",
    "CatalogStats",
    "CountryStats",
    "ExclusionFilter",
    "InMemorySnapshotStore",
    "ReconstructionPolicy",
    "SnapshotStore",
    "StatsAccumulator",
    "StatsCache",
    "VehicleCatalogService",
    "VehicleHistory",
    "VehicleSnapshot",
    "VehicleTypeStats",
    "WtConfigError",
    "WtError",
    "WtNotFoundError",
    "WtStorageError",
    "WtValidationError",
    "aggregate",
    "is_valid_version",
    "latest_version",
    "merge_version_universe",
    "sort_versions",
    "validate_version",
]
