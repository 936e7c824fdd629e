"""Data models for catalog snapshots and statistics."""

from pywtvehicles.models.requests import StatsRequest, VehicleRequest, VersionRequest
from pywtvehicles.models.snapshot import VehicleHistory, VehicleSnapshot
from pywtvehicles.models.stats import CatalogStats, CountryStats, VehicleTypeStats

__all__ = [
    "CatalogStats",
    "CountryStats",
    "StatsRequest",
    "VehicleHistory",
    "VehicleRequest",
    "VehicleSnapshot",
    "VehicleTypeStats",
    "VersionRequest",
]
