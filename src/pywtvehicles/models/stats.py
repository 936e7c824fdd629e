"""Aggregated catalog statistics."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class VehicleTypeStats(BaseModel):
    """Per-country breakdown for one vehicle type."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    count: int = 0
    total_value: int = 0
    total_req_exp: int = 0
    total_ge_cost: int = 0


class CountryStats(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    country: str
    total_vehicles: int = 0
    total_value: int = 0
    total_req_exp: int = 0
    total_ge_cost: int = 0
    vehicle_types: dict[str, VehicleTypeStats] = Field(default_factory=dict)


class CatalogStats(BaseModel):
    """Economic and classification totals for one reconstructed catalog.

    ``versions`` always lists every known catalog version, regardless of
    which version the stats were computed for.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_techtree_vehicles: int = 0
    total_premium_vehicles: int = 0
    total_sl_required: int = 0
    total_rp_required: int = 0
    total_ge_required: int = 0
    categories: dict[str, int] = Field(default_factory=dict)
    countries: list[CountryStats] = Field(default_factory=list)
    versions: list[str] = Field(default_factory=list)

    def country(self, name: str) -> CountryStats | None:
        """Return the breakdown for *name*, if that country has vehicles."""
        for entry in self.countries:
            if entry.country == name:
                return entry
        return None
