"""Profile source selection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ddscore.sources.dataset import DatasetSource
from ddscore.sources.graphql import GraphQLSource

if TYPE_CHECKING:
    from ddscore.config import ScoringConfig
    from ddscore.sources.base import ProfileSource


def get_source(config: ScoringConfig) -> ProfileSource:
    """GraphQL endpoint when configured, otherwise the JSON dataset."""
    if config.graphql_url:
        return GraphQLSource(
            config.graphql_url, token=config.graphql_token, timeout=config.http_timeout
        )
    if config.data_file:
        return DatasetSource.from_file(config.data_file)
    raise ValueError("no profile source configured: set data_file or graphql_url")
