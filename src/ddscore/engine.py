"""Scoring pipeline: load, gate, score, aggregate, record."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Literal

from pydantic import BaseModel

from ddscore.aggregator import Aggregate, aggregate
from ddscore.config import ScoringConfig
from ddscore.errors import PersistenceError, SourceError
from ddscore.gate import check_readiness
from ddscore.models import Blocked, CollectionType, Readiness, ScoringInput, ScoringSnapshot
from ddscore.scoring import score_all
from ddscore.sources.base import ProfileSource
from ddscore.stores.base import SnapshotStore
from ddscore.writer import SnapshotWriter

logger = logging.getLogger(__name__)


class Recorded(BaseModel):
    status: Literal["recorded"] = "recorded"
    snapshot: ScoringSnapshot


class Failed(BaseModel):
    status: Literal["failed"] = "failed"
    solution_id: str
    env_id: str
    error: str


RunOutcome = Recorded | Blocked | Failed


def calculate(data: ScoringInput, config: ScoringConfig | None = None) -> Aggregate | Blocked:
    """Score an already loaded input without persisting anything."""
    config = config or ScoringConfig()
    readiness = check_readiness(data)
    if isinstance(readiness, Blocked):
        return readiness
    return aggregate(score_all(readiness.input, config.weights), config)


class ScoringEngine:
    def __init__(
        self,
        source: ProfileSource,
        store: SnapshotStore,
        config: ScoringConfig | None = None,
    ) -> None:
        self.source = source
        self.config = config or ScoringConfig()
        self.writer = SnapshotWriter(store)

    async def check(self, solution_id: str, env_id: str) -> Readiness:
        data = await self.source.fetch(solution_id, env_id)
        return check_readiness(data)

    async def score(
        self,
        solution_id: str,
        env_id: str,
        collection_type: CollectionType = CollectionType.SNAPSHOT,
    ) -> Recorded | Blocked:
        """Run the full pipeline for one pair.

        A blocked run writes nothing. SourceError and PersistenceError
        propagate; the caller decides whether to rerun.
        """
        data = await self.source.fetch(solution_id, env_id)
        result = calculate(data, self.config)
        if isinstance(result, Blocked):
            return result

        logger.debug(
            "Scored %s/%s: %s (%s)", solution_id, env_id, result.global_score, result.risk_level
        )
        snapshot = await self.writer.record(solution_id, env_id, collection_type, result)
        return Recorded(snapshot=snapshot)

    async def score_many(
        self,
        pairs: Iterable[tuple[str, str]],
        collection_type: CollectionType = CollectionType.SNAPSHOT,
    ) -> list[RunOutcome]:
        """Score independent pairs concurrently; one failure does not stop the others."""

        async def run(solution_id: str, env_id: str) -> RunOutcome:
            try:
                return await self.score(solution_id, env_id, collection_type)
            except (SourceError, PersistenceError) as exc:
                logger.error("Scoring %s/%s failed: %s", solution_id, env_id, exc)
                return Failed(solution_id=solution_id, env_id=env_id, error=str(exc))

        return list(await asyncio.gather(*(run(s, e) for s, e in pairs)))
