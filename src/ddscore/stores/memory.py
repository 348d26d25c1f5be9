"""In-process snapshot store."""

from __future__ import annotations

from ddscore.models import ScoringSnapshot


class MemorySnapshotStore:
    name = "memory"

    def __init__(self) -> None:
        self._snapshots: list[ScoringSnapshot] = []
        self._ids: set[str] = set()

    async def append(self, snapshot: ScoringSnapshot) -> None:
        if snapshot.score_id in self._ids:
            raise ValueError(f"snapshot {snapshot.score_id} already exists")
        self._ids.add(snapshot.score_id)
        self._snapshots.append(snapshot)

    async def list(self, solution_id: str, env_id: str | None = None) -> list[ScoringSnapshot]:
        return [
            s for s in self._snapshots
            if s.solution_id == solution_id and (env_id is None or s.env_id == env_id)
        ]

    def __len__(self) -> int:
        return len(self._snapshots)
