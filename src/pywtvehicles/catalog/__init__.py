"""Catalog reconstruction, filtering and aggregation."""

from pywtvehicles.catalog.aggregation import StatsAccumulator, aggregate, aggregate_by_country
from pywtvehicles.catalog.exclusion import ExclusionFilter
from pywtvehicles.catalog.policy import ReconstructionPolicy
from pywtvehicles.catalog.reconstructor import CatalogReconstructor, select_as_of

__all__ = [
    "CatalogReconstructor",
    "ExclusionFilter",
    "ReconstructionPolicy",
    "StatsAccumulator",
    "aggregate",
    "aggregate_by_country",
    "select_as_of",
]
