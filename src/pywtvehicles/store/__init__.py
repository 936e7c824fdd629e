"""Snapshot storage layer.

Stores hold immutable snapshots and expose the live/historical split the
catalog reconstructor reads from.
"""

from pywtvehicles.store.base import SnapshotStore
from pywtvehicles.store.memory import InMemorySnapshotStore

__all__ = ["InMemorySnapshotStore", "SnapshotStore"]
