"""Catalog version strings: validation and numeric-aware ordering.

Versions look like ``"2.31"`` or ``"2.31.0.12"``. Requests must match
:data:`~pywtvehicles._constants.VERSION_PATTERN` exactly, while versions
already stored on snapshots may carry a trailing qualifier
(``"2.31.0.12 beta"``) and still need to sort sensibly.

Ordering compares digit runs as integers and everything else as text, so
``"1.10"`` sorts after ``"1.9"``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from pywtvehicles._constants import VERSION_PATTERN
from pywtvehicles.exceptions import WtValidationError

_DIGIT_RUN = re.compile(r"([0-9]+)")

VersionKey = tuple[tuple[int, int, str], ...]


def is_valid_version(value: object) -> bool:
    """Return ``True`` when *value* is a well-formed request version."""
    return isinstance(value, str) and VERSION_PATTERN.fullmatch(value) is not None


def validate_version(value: object) -> str:
    """Return *value* unchanged, or raise :class:`WtValidationError`."""
    if not is_valid_version(value):
        raise WtValidationError(f"Invalid version provided: {value!r}", value=value)
    assert isinstance(value, str)  # noqa: S101
    return value


def version_key(version: str) -> VersionKey:
    """Numeric-aware sort key for a version string.

    Digit runs rank before text at the same position, so a bare
    ``"1.9"`` prefix sorts before ``"1.9 beta"`` and ``"1.9.1"``.
    """
    parts: list[tuple[int, int, str]] = []
    for token in _DIGIT_RUN.split(version.strip()):
        if not token:
            continue
        if token.isdigit():
            parts.append((0, int(token), ""))
        else:
            parts.append((1, 0, token.lower()))
    return tuple(parts)


def compare_versions(left: str, right: str) -> int:
    """Return ``-1``, ``0`` or ``1`` comparing *left* against *right*."""
    left_key = version_key(left)
    right_key = version_key(right)
    return (left_key > right_key) - (left_key < right_key)


def sort_versions(versions: Iterable[str]) -> list[str]:
    """Deduplicate and sort *versions* ascending, numeric-aware."""
    return sorted(set(versions), key=lambda v: (version_key(v), v))


def latest_version(versions: Iterable[str]) -> str | None:
    """Return the greatest version, or ``None`` when *versions* is empty."""
    ordered = sort_versions(versions)
    return ordered[-1] if ordered else None


def merge_version_universe(live_versions: Iterable[str], historical_versions: Iterable[str]) -> list[str]:
    """Union of live and historical versions, deduplicated and sorted."""
    return sort_versions([*live_versions, *historical_versions])
