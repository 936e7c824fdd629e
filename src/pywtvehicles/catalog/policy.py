"""Point-in-time selection policy.

This module contains *no* storage access. It only decides which
snapshots are visible at a target version and which of two snapshots of
the same identifier wins.
"""

from __future__ import annotations

import dataclasses

from pywtvehicles.models.snapshot import VehicleSnapshot
from pywtvehicles.versions import compare_versions


@dataclasses.dataclass(frozen=True)
class ReconstructionPolicy:
    """Knobs for rebuilding a past catalog.

    Parameters
    ----------
    live_fallback : bool
        When ``False`` (the default), a target version other than the
        live version is rebuilt from historical rows only. A live row
        whose own version is older than the target is then not
        consulted, even if the vehicle was never revised after it.
        When ``True``, live rows with ``version <= target`` compete with
        historical rows as well.
    """

    live_fallback: bool = False


def is_visible_at(snapshot: VehicleSnapshot, target_version: str) -> bool:
    """Whether *snapshot* had been published by *target_version*."""
    return compare_versions(snapshot.version, target_version) <= 0


def supersedes(candidate: VehicleSnapshot, incumbent: VehicleSnapshot | None) -> bool:
    """Whether *candidate* is a newer revision than *incumbent*."""
    if incumbent is None:
        return True
    return compare_versions(candidate.version, incumbent.version) > 0
