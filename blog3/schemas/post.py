"""Post-related schemas."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, Field, field_validator


class PostPublish(BaseModel):
    """Request body for publishing or updating a post."""

    title: str = Field(
        min_length=1,
        max_length=500,
        description="Post title",
    )
    subtitle: str | None = Field(default=None, max_length=500)
    content: str = Field(
        max_length=500_000,
        description="Post body",
    )

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v

    @field_validator("subtitle", mode="before")
    @classmethod
    def blank_subtitle_is_none(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class RevisionResponse(BaseModel):
    """Identity and canonical slug of a post after a publish or update."""

    id: uuid.UUID
    slug: str
