"""Exceptions raised by the scoring engine."""

from __future__ import annotations


class ScoringError(Exception):
    """Base class for scoring engine errors."""


class MissingDataError(ScoringError):
    """Required profile fields are absent; the run was blocked before scoring."""

    def __init__(self, solution_id: str, env_id: str, missing: list[str]) -> None:
        self.solution_id = solution_id
        self.env_id = env_id
        self.missing = list(missing)
        super().__init__(
            f"Cannot score solution {solution_id} / environment {env_id}: "
            f"{len(self.missing)} required field(s) missing: {', '.join(self.missing)}"
        )


class InvalidEnumerationError(ScoringError, ValueError):
    """A stored value is outside the rule table for its field."""

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field}: unrecognized value {value!r}")


class SourceError(ScoringError):
    """Profile records could not be fetched or decoded."""


class PersistenceError(ScoringError):
    """A snapshot could not be appended to the store."""
