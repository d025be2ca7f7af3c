from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tasknet.models.base import Base, TaggedMixin, TimestampMixin


class Wiki(TaggedMixin, TimestampMixin, Base):
    __tablename__ = "wikis"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("wikis.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (Index("ix_wikis_updated_at", "updated_at"),)
