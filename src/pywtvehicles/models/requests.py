"""Pydantic request models for service entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
They are used internally by :class:`pywtvehicles.service.VehicleCatalogService`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from pywtvehicles.versions import is_valid_version


class VersionRequest(BaseModel):
    """Request carrying an optional target version."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
    )

    version: str | None = None

    @field_validator("version")
    @classmethod
    def _version_format(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if not is_valid_version(value):
            raise ValueError(f"invalid version {value!r}")
        return value


class StatsRequest(VersionRequest):
    pass


class VehicleRequest(VersionRequest):
    identifier: str

    @field_validator("identifier")
    @classmethod
    def _identifier_non_empty(cls, value: str) -> str:
        identifier = value.strip()
        if not identifier:
            raise ValueError("identifier must be non-empty")
        return identifier
