"""Snapshot writer: turn an aggregate into a new, immutable snapshot."""

from __future__ import annotations

import logging
import secrets
from datetime import UTC, datetime

from ddscore.aggregator import Aggregate
from ddscore.errors import PersistenceError
from ddscore.models import CollectionType, ScoringSnapshot
from ddscore.stores.base import SnapshotStore

logger = logging.getLogger(__name__)


def generate_score_id(
    solution_id: str, env_id: str, collection_type: CollectionType, date: datetime
) -> str:
    """Content-independent id: timestamp plus a random suffix, no shared counter."""
    millis = int(date.timestamp() * 1000)
    return f"score-{collection_type.value}-{solution_id}-{env_id}-{millis}-{secrets.token_hex(4)}"


class SnapshotWriter:
    def __init__(self, store: SnapshotStore) -> None:
        self.store = store

    async def record(
        self,
        solution_id: str,
        env_id: str,
        collection_type: CollectionType,
        result: Aggregate,
    ) -> ScoringSnapshot:
        """Append a snapshot. Any store failure is raised as PersistenceError, never retried."""
        date = datetime.now(UTC)
        snapshot = ScoringSnapshot(
            score_id=generate_score_id(solution_id, env_id, collection_type, date),
            solution_id=solution_id,
            env_id=env_id,
            date=date,
            collection_type=collection_type,
            scores=result.scores,
            global_score=result.global_score,
            risk_level=result.risk_level,
            notes=result.notes,
            calculation_details=result.details,
            calculation_report=result.report,
        )
        try:
            await self.store.append(snapshot)
        except PersistenceError:
            raise
        except Exception as exc:
            raise PersistenceError(
                f"could not append snapshot {snapshot.score_id} to {self.store.name} store: {exc}"
            ) from exc

        logger.info(
            "Snapshot %s recorded for %s/%s: score %s, risk %s",
            snapshot.score_id, solution_id, env_id,
            snapshot.global_score, snapshot.risk_level.value,
        )
        return snapshot
