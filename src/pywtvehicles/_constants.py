"""Internal constants shared across the library."""

import re

# Digits and dots, 2-4 segments (e.g. ``"2.31"``, ``"2.31.0.12"``).
VERSION_PATTERN = re.compile(r"^[0-9]+(?:\.[0-9]+){1,3}$")

# Identifiers ending with this marker are killstreak reward variants,
# not catalog vehicles.
REWARD_SUFFIX = "killstreak"

# Event-only vehicles excluded from catalog statistics. Deployments
# configure the actual list through ``WTV_EXCLUDED_IDENTIFIERS``.
EVENT_VEHICLES: frozenset[str] = frozenset()

DEFAULT_STATS_CACHE_TTL: float = 300.0
