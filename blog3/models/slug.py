"""Slug directory model."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from blog3.models.base import Base, OffsetDateTime


class Slug(Base):
    """Every slug ever issued.

    ``superseded_by`` is NULL for the post's canonical slug and names the
    canonical slug for every retired one.
    """

    __tablename__ = "slugs"

    slug: Mapped[str] = mapped_column(Text, primary_key=True)
    post_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("posts.id"), nullable=False)
    superseded_by: Mapped[str | None] = mapped_column(
        Text, ForeignKey("slugs.slug"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(OffsetDateTime, nullable=False)

    __table_args__ = (Index("idx_slugs_post_id", "post_id"),)
