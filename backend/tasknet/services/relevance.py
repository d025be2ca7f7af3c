"""Text relevance helpers shared by every search source.

Scores use a single normalized scale: a title hit is worth 1.0, a body hit
0.8 and a tag (or document file type) hit 0.6. Only the best tier counts.
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Iterable
from typing import Any

from tasknet.config import settings

logger = logging.getLogger(__name__)

TITLE_SCORE = 1.0
BODY_SCORE = 0.8
TAG_SCORE = 0.6

ELLIPSIS = "..."

# Wraps every tag in the searchable tag index. It is whitespace, so a
# normalized query can only carry it in the middle.
TAG_SEPARATOR = "\x1f"


def contains(haystack: str | None, needle: str) -> bool:
    if not haystack:
        return False
    return needle.lower() in haystack.lower()


def score_match(
    query: str,
    title: str | None,
    body: str | None = None,
    tags: Iterable[str] = (),
) -> float:
    if contains(title, query):
        return TITLE_SCORE
    if contains(body, query):
        return BODY_SCORE
    if any(contains(tag, query) for tag in tags):
        return TAG_SCORE
    return 0.0


def make_excerpt(text: str | None, query: str, radius: int | None = None) -> str:
    """Return a short preview of ``text`` centred on the first match of ``query``.

    Without a match the head of the text (``radius * 2`` characters) is used.
    """
    if radius is None:
        radius = settings.search_excerpt_radius
    if not text:
        return ""

    match = re.search(re.escape(query), text, re.IGNORECASE) if query else None
    if match is None:
        head = text[: radius * 2]
        return head + ELLIPSIS if len(text) > radius * 2 else head

    start = max(0, match.start() - radius)
    end = min(len(text), match.end() + radius)
    excerpt = text[start:end]
    if start > 0:
        excerpt = ELLIPSIS + excerpt
    if end < len(text):
        excerpt = excerpt + ELLIPSIS
    return excerpt


def parse_tags(raw: Any) -> list[str]:
    """Decode a tags column. Anything but a JSON list of strings becomes []."""
    if raw is None or raw == "":
        return []
    if isinstance(raw, list):
        value = raw
    else:
        try:
            value = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed tags value: %r", raw)
            return []

    if not isinstance(value, list):
        logger.warning("Ignoring non-list tags value: %r", raw)
        return []
    return [tag for tag in value if isinstance(tag, str)]


def clamp_limit(raw: Any) -> int:
    """Coerce a caller supplied limit into [1, search_max_limit].

    Missing or non-numeric values fall back to ``search_default_limit``.
    """
    default = settings.search_default_limit
    if raw is None:
        return default

    if isinstance(raw, str):
        raw = raw.strip()
        try:
            value = float(raw)
        except ValueError:
            return default
    elif isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = float(raw)
    else:
        return default

    if math.isnan(value):
        return default
    if math.isinf(value):
        return settings.search_max_limit if value > 0 else 1

    return max(1, min(settings.search_max_limit, int(value)))


def dump_tags(tags: Iterable[str]) -> str:
    return json.dumps(list(tags), ensure_ascii=False)


def build_tag_index(tags: Iterable[str]) -> str:
    """Join tags as ``<sep>a<sep>b<sep>`` so a substring match stays inside one tag."""
    cleaned = [tag.replace(TAG_SEPARATOR, "") for tag in tags]
    if not cleaned:
        return ""
    return TAG_SEPARATOR + TAG_SEPARATOR.join(cleaned) + TAG_SEPARATOR
