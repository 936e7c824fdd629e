"""Drop non-catalog identifiers before aggregation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from pywtvehicles._constants import EVENT_VEHICLES, REWARD_SUFFIX
from pywtvehicles.models.snapshot import VehicleSnapshot

if TYPE_CHECKING:
    from pywtvehicles.config import CatalogConfig


class ExclusionFilter:
    """Remove event-only vehicles and killstreak reward variants.

    An identifier is kept only if it is not in the excluded set *and*
    does not end with the reward suffix. Both checks are case-sensitive.
    """

    def __init__(
        self,
        excluded: Iterable[str] = EVENT_VEHICLES,
        reward_suffix: str = REWARD_SUFFIX,
    ) -> None:
        self._excluded = frozenset(excluded)
        self._reward_suffix = reward_suffix

    @classmethod
    def from_config(cls, config: CatalogConfig) -> ExclusionFilter:
        return cls(config.excluded_identifiers, config.reward_suffix)

    @property
    def excluded(self) -> frozenset[str]:
        return self._excluded

    def is_included(self, identifier: str) -> bool:
        if identifier in self._excluded:
            return False
        return not (self._reward_suffix and identifier.endswith(self._reward_suffix))

    def apply(self, catalog: Mapping[str, VehicleSnapshot]) -> dict[str, VehicleSnapshot]:
        return {identifier: snapshot for identifier, snapshot in catalog.items() if self.is_included(identifier)}
