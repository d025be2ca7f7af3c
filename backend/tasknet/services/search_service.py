from __future__ import annotations

import asyncio
import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tasknet.api.schemas.search import SearchResponse, SearchResult, SearchScope
from tasknet.services.ranking import build_facets, rank_results
from tasknet.services.relevance import clamp_limit
from tasknet.services.search_sources import (
    BaseSearchSource,
    SearchSourceRegistry,
    SourceHits,
    default_registry,
)

logger = logging.getLogger(__name__)


class SearchService:
    """Fans a query out over the registered sources and merges the results.

    Each source runs in its own session, so sources can be queried
    concurrently and a failing source does not poison the others.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        registry: SearchSourceRegistry | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.registry = registry or default_registry()

    async def search(
        self,
        query: str | None,
        scope: SearchScope = SearchScope.ALL,
        limit: Any = None,
    ) -> SearchResponse:
        q = (query or "").strip()
        if not q:
            return SearchResponse()

        effective_limit = clamp_limit(limit)
        sources = self.registry.select(scope)

        hits = await asyncio.gather(
            *(self._search_source(source, q, effective_limit) for source in sources)
        )
        aggregated: list[SearchResult] = [r for h in hits for r in h.results]
        type_counts = {source.result_type: h.total for source, h in zip(sources, hits)}
        total_count = sum(type_counts.values())

        facets = build_facets(aggregated, type_counts=type_counts)
        ranked = rank_results(aggregated)

        logger.info(
            "Search %r (type=%s, limit=%d): %d matches",
            q, scope.value, effective_limit, total_count,
        )
        return SearchResponse(
            results=ranked[:effective_limit],
            total_count=total_count,
            facets=facets,
        )

    async def _search_source(
        self, source: BaseSearchSource, query: str, limit: int
    ) -> SourceHits:
        try:
            async with self.session_factory() as session:
                hits = await source.search(session, query, limit)
        except Exception:
            logger.exception("Search source '%s' failed, skipping", source.scope.value)
            return SourceHits([], 0)

        logger.debug(
            "Search source '%s' returned %d of %d rows",
            source.scope.value, len(hits.results), hits.total,
        )
        return hits
