"""Vehicle snapshot model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pywtvehicles._normalize import safe_bool, safe_int


class VehicleSnapshot(BaseModel):
    """The full record of one vehicle's attributes as of one version.

    Snapshots are immutable. The same ``identifier`` appears once per
    version at which the vehicle was revised.

    Economic fields are optional: values the source could not express as
    a number (``"N/A"``, ``""``, ``"--"``) become ``None`` rather than
    failing validation.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    identifier: str
    """Vehicle identifier (e.g. ``"p-51d-30_usaaf_korea"``)."""
    version: str
    """Catalog version this snapshot belongs to."""
    country: str = ""
    """Nation the vehicle belongs to (e.g. ``"country_usa"``)."""
    vehicle_type: str = ""
    """Vehicle class (e.g. ``"fighter"``, ``"bomber"``, ``"assault"``)."""
    value: int | None = None
    """Purchase cost in silver lions."""
    req_exp: int | None = None
    """Research points required to unlock."""
    ge_cost: int | None = None
    """Price in golden eagles."""
    is_premium: bool = False
    is_pack: bool = False
    on_marketplace: bool = False

    @field_validator("identifier", "version")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must be non-empty")
        return value

    @field_validator("country", "vehicle_type", mode="before")
    @classmethod
    def _coerce_label(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("value", "req_exp", "ge_cost", mode="before")
    @classmethod
    def _coerce_ints(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("is_premium", "is_pack", "on_marketplace", mode="before")
    @classmethod
    def _coerce_flags(cls, value: Any) -> bool:
        return safe_bool(value)

    @property
    def key(self) -> tuple[str, str]:
        """``(identifier, version)`` pair that uniquely names this snapshot."""
        return (self.identifier, self.version)


class VehicleHistory(BaseModel):
    """A vehicle snapshot plus every version at which the vehicle existed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    snapshot: VehicleSnapshot
    versions: list[str] = Field(default_factory=list)
