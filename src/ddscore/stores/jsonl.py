"""Append-only JSON Lines snapshot store."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from ddscore.models import ScoringSnapshot

logger = logging.getLogger(__name__)


class JsonlSnapshotStore:
    """One snapshot per line. The file is only ever opened for appending.

    Lines that cannot be decoded (for example a write cut short by a crash)
    are logged and skipped; they never make the log unreadable or unwritable.
    """

    name = "jsonl"

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _lines(self) -> Iterator[tuple[int, str]]:
        if not self.path.exists():
            return
        with self.path.open(encoding="utf-8") as fh:
            for lineno, line in enumerate(fh, start=1):
                if line.strip():
                    yield lineno, line

    def _ids(self) -> set[str]:
        ids: set[str] = set()
        for lineno, line in self._lines():
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                logger.warning("%s:%d: skipping undecodable line", self.path, lineno)
                continue
            if isinstance(record, dict) and isinstance(record.get("score_id"), str):
                ids.add(record["score_id"])
        return ids

    def _ends_mid_line(self) -> bool:
        if not self.path.exists() or self.path.stat().st_size == 0:
            return False
        with self.path.open("rb") as fh:
            fh.seek(-1, os.SEEK_END)
            return fh.read(1) != b"\n"

    async def append(self, snapshot: ScoringSnapshot) -> None:
        if snapshot.score_id in self._ids():
            raise ValueError(f"snapshot {snapshot.score_id} already exists")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # A truncated last line must not swallow the new record
        prefix = "\n" if self._ends_mid_line() else ""
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(prefix + snapshot.model_dump_json() + "\n")

    async def list(self, solution_id: str, env_id: str | None = None) -> list[ScoringSnapshot]:
        snapshots = []
        for lineno, line in self._lines():
            try:
                snapshot = ScoringSnapshot.model_validate_json(line)
            except ValidationError as exc:
                logger.warning(
                    "%s:%d: skipping corrupt snapshot (%d error(s))",
                    self.path, lineno, exc.error_count(),
                )
                continue
            if snapshot.solution_id != solution_id:
                continue
            if env_id is None or snapshot.env_id == env_id:
                snapshots.append(snapshot)
        return snapshots
