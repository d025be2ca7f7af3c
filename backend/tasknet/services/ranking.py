from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime, timezone
from typing import Any

from tasknet.api.schemas.search import (
    ResultType,
    SearchFacets,
    SearchResult,
    TagFacet,
    TypeFacet,
)
from tasknet.config import settings

EPOCH = 0.0

# Probed in order; the first present and parseable value is the recency.
RECENCY_FIELDS: tuple[str, ...] = (
    "updated_at",
    "received_at",
    "created_at",
    "due_date",
    "start_date",
    "end_date",
)


def _field_getter(name: str) -> Callable[[Any], Any]:
    return lambda metadata: getattr(metadata, name, None)


RECENCY_PROBES: tuple[Callable[[Any], Any], ...] = tuple(
    _field_getter(name) for name in RECENCY_FIELDS
)


def to_timestamp(value: Any) -> float | None:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            dt = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def recency_of(result: SearchResult) -> float:
    for probe in RECENCY_PROBES:
        ts = to_timestamp(probe(result.metadata))
        if ts is not None:
            return ts
    return EPOCH


def rank_results(results: Sequence[SearchResult]) -> list[SearchResult]:
    """Order by score, then recency, both descending. Ties keep input order."""
    return sorted(results, key=lambda r: (r.score, recency_of(r)), reverse=True)


def result_tags(result: SearchResult) -> list[str]:
    return list(getattr(result.metadata, "tags", None) or [])


def build_facets(
    results: Sequence[SearchResult],
    type_counts: Mapping[ResultType, int] | None = None,
    tag_limit: int | None = None,
) -> SearchFacets:
    """Tally results by type and by tag.

    ``type_counts`` overrides the per-type tally when sources report more
    matches than they returned rows for. Tags are only known for fetched
    rows, so tag counts never exceed the per-source row cap: 30 matching
    notes tagged ``urgent`` under ``limit=5`` facet as note:30 and urgent:5.
    """
    if tag_limit is None:
        tag_limit = settings.search_tag_facet_limit
    if type_counts is None:
        type_counts = Counter(r.type for r in results)

    # Counter preserves first-seen order and sorted() is stable, so equal
    # counts stay in encounter order.
    tag_counts = Counter(tag for r in results for tag in result_tags(r))

    types = sorted(
        ((t, n) for t, n in type_counts.items() if n > 0), key=lambda kv: kv[1], reverse=True
    )
    tags = sorted(tag_counts.items(), key=lambda kv: kv[1], reverse=True)[:tag_limit]

    return SearchFacets(
        types=[TypeFacet(type=t, count=n) for t, n in types],
        tags=[TagFacet(tag=t, count=n) for t, n in tags],
    )
