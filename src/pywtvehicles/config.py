"""Catalog configuration for pywtvehicles."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pywtvehicles._constants import DEFAULT_STATS_CACHE_TTL, EVENT_VEHICLES, REWARD_SUFFIX
from pywtvehicles.exceptions import WtConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_csv(value: str) -> frozenset[str]:
    return frozenset(item.strip() for item in value.split(",") if item.strip())


@dataclasses.dataclass(frozen=True)
class CatalogConfig:
    """Catalog query configuration.

    Parameters
    ----------
    excluded_identifiers : frozenset[str]
        Event-only vehicles left out of statistics. Matched
        case-sensitively against stored identifiers.
    reward_suffix : str
        Identifiers ending with this marker (killstreak reward variants)
        are left out of statistics. An empty string disables the check.
    live_fallback : bool
        Let live rows older than a requested past version take part in
        reconstruction. See :class:`pywtvehicles.catalog.ReconstructionPolicy`.
    stats_cache_ttl : float
        Seconds a computed stats result stays cached per requested
        version in a cache built with
        :meth:`pywtvehicles.StatsCache.from_config`. Set to ``0`` to
        disable caching.
    """

    excluded_identifiers: frozenset[str] = EVENT_VEHICLES
    reward_suffix: str = REWARD_SUFFIX
    live_fallback: bool = False
    stats_cache_ttl: float = DEFAULT_STATS_CACHE_TTL

    def __post_init__(self) -> None:
        if not isinstance(self.excluded_identifiers, frozenset):
            object.__setattr__(self, "excluded_identifiers", frozenset(self.excluded_identifiers))
        if self.stats_cache_ttl < 0:
            raise WtConfigError(f"stats_cache_ttl must be >= 0, got {self.stats_cache_ttl}")

    @classmethod
    def from_env(cls, **overrides: Any) -> CatalogConfig:
        """Create configuration from environment variables.

        Reads ``WTV_EXCLUDED_IDENTIFIERS`` (comma separated, replaces the
        built-in list), ``WTV_EXTRA_EXCLUDED_IDENTIFIERS`` (comma
        separated, added to it), ``WTV_REWARD_SUFFIX``,
        ``WTV_LIVE_FALLBACK`` and ``WTV_STATS_CACHE_TTL``. Explicit
        keyword arguments override environment values.

        Raises
        ------
        WtConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        excluded = EVENT_VEHICLES
        excluded_env = env.get("WTV_EXCLUDED_IDENTIFIERS")
        if excluded_env is not None:
            excluded = _env_csv(excluded_env)
        extra_env = env.get("WTV_EXTRA_EXCLUDED_IDENTIFIERS")
        if extra_env is not None:
            excluded = excluded | _env_csv(extra_env)
        config_kwargs["excluded_identifiers"] = excluded

        suffix_env = env.get("WTV_REWARD_SUFFIX")
        if suffix_env is not None:
            config_kwargs["reward_suffix"] = suffix_env.strip()

        if "live_fallback" not in overrides:
            config_kwargs["live_fallback"] = _env_bool(env.get("WTV_LIVE_FALLBACK"), False)

        ttl_env = env.get("WTV_STATS_CACHE_TTL")
        if ttl_env is not None and "stats_cache_ttl" not in overrides:
            try:
                config_kwargs["stats_cache_ttl"] = float(ttl_env)
            except ValueError as exc:
                raise WtConfigError(f"WTV_STATS_CACHE_TTL must be a number, got {ttl_env!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
