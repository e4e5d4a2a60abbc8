"""Slug directory: every slug ever issued and where it points now.

All functions run on the caller's session, so they take part in whatever
transaction the caller has open.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import ColumnElement, func, select, update

from blog3.models.slug import Slug

if TYPE_CHECKING:
    import uuid
    from datetime import datetime

    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


def _has_prefix(candidate: str) -> ColumnElement[bool]:
    # substr keeps the match literal and case-sensitive, unlike SQLite LIKE.
    return func.substr(Slug.slug, 1, len(candidate)) == candidate


async def count_similar(session: AsyncSession, candidate: str) -> int:
    """Count slugs that start with ``candidate``."""
    stmt = select(func.count()).select_from(Slug).where(_has_prefix(candidate))
    result = await session.execute(stmt)
    return result.scalar() or 0


async def find_similar(session: AsyncSession, candidate: str) -> dict[uuid.UUID, str]:
    """Map each post owning a slug that starts with ``candidate`` to that slug.

    When a post owns several matching slugs, the exact ``candidate`` wins,
    otherwise the oldest one.
    """
    stmt = (
        select(Slug.post_id, Slug.slug)
        .where(_has_prefix(candidate))
        .order_by((Slug.slug == candidate).desc(), Slug.created_at, Slug.slug)
    )
    result = await session.execute(stmt)
    owners: dict[uuid.UUID, str] = {}
    for post_id, slug in result.all():
        owners.setdefault(post_id, slug)
    return owners


async def insert_slug(
    session: AsyncSession, slug: str, post_id: uuid.UUID, created_at: datetime
) -> None:
    """Issue a new canonical slug for ``post_id``.

    Raises ``sqlalchemy.exc.IntegrityError`` if the slug already exists.
    """
    session.add(Slug(slug=slug, post_id=post_id, superseded_by=None, created_at=created_at))
    await session.flush()
    logger.debug("Issued slug %s for post %s", slug, post_id)


async def resolve_canonical(session: AsyncSession, slug: str) -> tuple[uuid.UUID, str] | None:
    """Return ``(post_id, canonical_slug)`` for any slug ever issued, else None."""
    stmt = select(Slug.post_id, Slug.superseded_by).where(Slug.slug == slug)
    result = await session.execute(stmt)
    row = result.one_or_none()
    if row is None:
        return None
    post_id, superseded_by = row
    return post_id, superseded_by if superseded_by is not None else slug


async def retarget(session: AsyncSession, post_id: uuid.UUID, canonical: str) -> None:
    """Point every other slug of ``post_id`` straight at ``canonical``.

    Slugs already pointing elsewhere are repointed, never chained, so
    resolution is always one hop. The canonical row itself is cleared, which
    revives a retired slug when a post goes back to an earlier title.
    """
    await session.execute(
        update(Slug)
        .where(Slug.post_id == post_id, Slug.slug != canonical)
        .values(superseded_by=canonical)
    )
    await session.execute(
        update(Slug)
        .where(Slug.post_id == post_id, Slug.slug == canonical)
        .values(superseded_by=None)
    )


async def slugs_for_post(session: AsyncSession, post_id: uuid.UUID) -> list[Slug]:
    """All slug rows of a post, oldest first."""
    stmt = select(Slug).where(Slug.post_id == post_id).order_by(Slug.created_at, Slug.slug)
    result = await session.execute(stmt)
    return list(result.scalars().all())
