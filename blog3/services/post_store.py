"""Post store: current post rows plus the archive of superseded versions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import select

from blog3.models.post import ArchivedPost, Post
from blog3.models.slug import Slug

if TYPE_CHECKING:
    import uuid
    from datetime import datetime

    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecentPost:
    """Index entry: a post with its canonical slug."""

    slug: str
    title: str
    subtitle: str | None
    published_at: datetime


async def insert_post(session: AsyncSession, post: Post) -> None:
    """Create a post row. Raises ``IntegrityError`` if the id is taken."""
    session.add(post)
    await session.flush()


async def find_post_by_id(session: AsyncSession, post_id: uuid.UUID) -> Post | None:
    """Get a post by id."""
    return await session.get(Post, post_id)


async def update_post(
    session: AsyncSession,
    post: Post,
    *,
    title: str,
    subtitle: str | None,
    content: str,
    updated_at: datetime,
) -> Post:
    """Overwrite the mutable fields of an existing post.

    ``published_at`` is left alone: it is the original publish time.
    """
    post.title = title
    post.subtitle = subtitle
    post.content = content
    post.updated_at = updated_at
    await session.flush()
    return post


async def archive_post(session: AsyncSession, post: Post, archived_at: datetime) -> ArchivedPost:
    """Write a snapshot of ``post`` as it is now."""
    archived = ArchivedPost(
        post_id=post.id,
        title=post.title,
        subtitle=post.subtitle,
        content=post.content,
        published_at=post.published_at,
        updated_at=post.updated_at,
        archived_at=archived_at,
    )
    session.add(archived)
    await session.flush()
    logger.debug("Archived post %s as version %d", post.id, archived.seq)
    return archived


async def list_archived(session: AsyncSession, post_id: uuid.UUID) -> list[ArchivedPost]:
    """Archived versions of a post in the order they were written."""
    stmt = select(ArchivedPost).where(ArchivedPost.post_id == post_id).order_by(ArchivedPost.seq)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_recent(session: AsyncSession, limit: int) -> list[RecentPost]:
    """Latest posts with their canonical slugs, newest first."""
    stmt = (
        select(Slug.slug, Post.title, Post.subtitle, Post.published_at)
        .join(Slug, Slug.post_id == Post.id)
        .where(Slug.superseded_by.is_(None))
        .order_by(Post.published_at_utc.desc())
        .limit(limit)
    )
    result = await session.execute(stmt)
    return [
        RecentPost(slug=slug, title=title, subtitle=subtitle, published_at=published_at)
        for slug, title, subtitle, published_at in result.all()
    ]
