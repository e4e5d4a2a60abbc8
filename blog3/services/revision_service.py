"""Revision coordinator: publish, update and read posts by slug.

Each publish or update runs as a single transaction covering the post row,
the archive snapshot and the slug directory. Nothing is committed unless every
step succeeds.

Slug numbering relies on the database to serialize writers. Two concurrent
revisions of different posts whose titles share a base slug can both count
the same collisions; the later commit then fails on the slug's primary key
and surfaces as a ``StorageError`` for the caller to retry. No application
level lock is taken on the slug prefix.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from blog3.exceptions import InconsistentStateError, NotFoundError, Operation, StorageError
from blog3.models.post import Post
from blog3.services.datetime_service import now_in
from blog3.services.post_store import archive_post, find_post_by_id, insert_post, update_post
from blog3.services.slug_directory import (
    count_similar,
    find_similar,
    insert_slug,
    resolve_canonical,
    retarget,
)
from blog3.services.slug_service import generate_slug

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Revision:
    """Outcome of a publish or update."""

    id: uuid.UUID
    slug: str


@dataclass(frozen=True)
class PostPage:
    """Read result: the post lives at the requested slug."""

    post: Post
    slug: str


@dataclass(frozen=True)
class Redirect:
    """Read result: the requested slug was retired in favour of ``slug``."""

    slug: str


class RevisionCoordinator:
    """Single writer of posts, archive entries and slugs."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        timezone: str = "UTC",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._session = session
        self._clock = clock if clock is not None else (lambda: now_in(timezone))

    async def publish(self, *, title: str, subtitle: str | None, content: str) -> Revision:
        """Create a post and issue its first slug."""
        now = self._clock()
        post = Post(
            id=uuid.uuid4(),
            title=title,
            subtitle=subtitle,
            content=content,
            published_at=now,
            updated_at=now,
        )
        logger.debug("Publishing post %s", post.id)

        try:
            async with self._session.begin():
                await insert_post(self._session, post)

                base = generate_slug(post.title, post.published_at)
                taken = await count_similar(self._session, base)
                slug = f"{base}-{taken}" if taken > 0 else base

                await insert_slug(self._session, slug, post.id, now)
        except SQLAlchemyError as exc:
            logger.error("Publish of post %s failed: %s", post.id, exc)
            raise StorageError(Operation.PUBLISH, "transaction aborted", post_id=post.id) from exc

        logger.info("Published post %s at %s", post.id, slug)
        return Revision(id=post.id, slug=slug)

    async def update(
        self, post_id: uuid.UUID, *, title: str, subtitle: str | None, content: str
    ) -> Revision:
        """Archive the current version of a post, overwrite it and settle its slug.

        Raises ``NotFoundError`` if no post has ``post_id``.
        """
        now = self._clock()

        try:
            async with self._session.begin():
                existing = await find_post_by_id(self._session, post_id)
                if existing is None:
                    logger.debug("Update of unknown post %s", post_id)
                    raise NotFoundError(Operation.UPDATE, post_id)

                await archive_post(self._session, existing, now)
                post = await update_post(
                    self._session,
                    existing,
                    title=title,
                    subtitle=subtitle,
                    content=content,
                    updated_at=now,
                )

                base = generate_slug(post.title, post.published_at)
                owners = await find_similar(self._session, base)
                if post.id in owners:
                    slug = owners[post.id]
                    minted = False
                elif owners:
                    taken = await count_similar(self._session, base)
                    slug = f"{base}-{taken}"
                    minted = True
                else:
                    slug = base
                    minted = True
                logger.debug("Post %s settles on slug %s (minted=%s)", post.id, slug, minted)

                if minted:
                    await insert_slug(self._session, slug, post.id, now)
                await retarget(self._session, post.id, slug)
        except SQLAlchemyError as exc:
            logger.error("Update of post %s failed: %s", post_id, exc)
            raise StorageError(Operation.UPDATE, "transaction aborted", post_id=post_id) from exc

        logger.info("Updated post %s at %s", post_id, slug)
        return Revision(id=post_id, slug=slug)

    async def read_by_slug(self, slug: str) -> PostPage | Redirect:
        """Resolve a slug to its post, or to a redirect if it was retired.

        Raises ``NotFoundError`` for a slug that was never issued and
        ``InconsistentStateError`` if the slug names a missing post.
        """
        try:
            async with self._session.begin():
                resolved = await resolve_canonical(self._session, slug)
                if resolved is None:
                    raise NotFoundError(Operation.READ_BY_SLUG, slug)

                post_id, canonical = resolved
                if canonical != slug:
                    logger.debug("Redirecting %s to %s", slug, canonical)
                    return Redirect(slug=canonical)

                post = await find_post_by_id(self._session, post_id)
        except SQLAlchemyError as exc:
            logger.error("Read of slug %s failed: %s", slug, exc)
            raise StorageError(Operation.READ_BY_SLUG, "lookup failed", slug=slug) from exc

        if post is None:
            logger.error("[BUG] Slug %s points at missing post %s", slug, post_id)
            raise InconsistentStateError(Operation.READ_BY_SLUG, slug, post_id)
        return PostPage(post=post, slug=slug)
