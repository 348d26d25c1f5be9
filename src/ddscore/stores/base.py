"""Snapshot store protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ddscore.models import ScoringSnapshot


@runtime_checkable
class SnapshotStore(Protocol):
    name: str

    async def append(self, snapshot: ScoringSnapshot) -> None:
        """Append a new snapshot. Never overwrites; duplicate ids are rejected."""
        ...

    async def list(self, solution_id: str, env_id: str | None = None) -> list[ScoringSnapshot]:
        """Snapshots of a solution (optionally one environment), oldest first."""
        ...
