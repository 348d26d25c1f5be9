"""Profile source protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ddscore.models import ScoringInput


@runtime_checkable
class ProfileSource(Protocol):
    name: str

    async def fetch(self, solution_id: str, env_id: str) -> ScoringInput:
        """Load every record needed to score one (solution, environment) pair.

        Records that do not exist are left as None; the completeness gate
        decides what that means.
        """
        ...
