"""Post and archived post models."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, validates

from blog3.models.base import Base, OffsetDateTime


class Post(Base):
    """Current content of a post. One row per post id, never deleted."""

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    subtitle: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    published_at: Mapped[datetime] = mapped_column(OffsetDateTime, nullable=False)
    # Naive UTC copy of published_at. Offset text does not sort in time order.
    published_at_utc: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(OffsetDateTime, nullable=False)

    __table_args__ = (Index("idx_posts_published_at_utc", "published_at_utc"),)

    @validates("published_at")
    def _sync_sort_key(self, key: str, value: datetime) -> datetime:
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        self.published_at_utc = value.astimezone(UTC).replace(tzinfo=None)
        return value


class ArchivedPost(Base):
    """Snapshot of a post taken just before an update overwrote it."""

    __tablename__ = "archived_posts"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("posts.id"), nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    subtitle: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    published_at: Mapped[datetime] = mapped_column(OffsetDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(OffsetDateTime, nullable=False)
    archived_at: Mapped[datetime] = mapped_column(OffsetDateTime, nullable=False)

    __table_args__ = (Index("idx_archived_posts_post_id", "post_id"),)
