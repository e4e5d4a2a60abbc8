"""SQLAlchemy ORM models for Blog3."""

from blog3.models.base import Base
from blog3.models.post import ArchivedPost, Post
from blog3.models.slug import Slug

__all__ = [
    "ArchivedPost",
    "Base",
    "Post",
    "Slug",
]
