"""Snapshot store registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ddscore.stores.jsonl import JsonlSnapshotStore
from ddscore.stores.memory import MemorySnapshotStore

if TYPE_CHECKING:
    from ddscore.config import ScoringConfig
    from ddscore.stores.base import SnapshotStore


def get_store(config: ScoringConfig) -> SnapshotStore:
    if config.store_path == ":memory:":
        return MemorySnapshotStore()
    return JsonlSnapshotStore(config.store_path)
