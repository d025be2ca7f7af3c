from datetime import datetime, timezone

from sqlalchemy import DateTime, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, validates

from tasknet.services.relevance import build_tag_index, parse_tags


def utcnow() -> datetime:
    return datetime.utcnow()


def naive_utc(value: datetime | None) -> datetime | None:
    """Columns are naive UTC; convert aware timestamps coming from clients."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )


class TaggedMixin:
    # JSON-encoded list of strings
    tags: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    # Derived from tags on every assignment; searched instead of the JSON text
    tag_index: Mapped[str] = mapped_column(Text, nullable=False, default="")

    @validates("tags")
    def _sync_tag_index(self, key, value):
        self.tag_index = build_tag_index(parse_tags(value))
        return value
