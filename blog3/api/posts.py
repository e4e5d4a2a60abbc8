"""Editor endpoints: publish and update posts."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends

from blog3.api.deps import get_coordinator, require_editor
from blog3.schemas.post import PostPublish, RevisionResponse
from blog3.services.revision_service import RevisionCoordinator

router = APIRouter(prefix="/.blog3", tags=["posts"], dependencies=[Depends(require_editor)])


@router.post("/publish", response_model=RevisionResponse)
async def publish_post_endpoint(
    body: PostPublish,
    coordinator: Annotated[RevisionCoordinator, Depends(get_coordinator)],
) -> RevisionResponse:
    """Publish a new post and return its id and slug."""
    revision = await coordinator.publish(
        title=body.title, subtitle=body.subtitle, content=body.content
    )
    return RevisionResponse(id=revision.id, slug=revision.slug)


@router.post("/publish/{post_id}", response_model=RevisionResponse)
async def update_post_endpoint(
    post_id: uuid.UUID,
    body: PostPublish,
    coordinator: Annotated[RevisionCoordinator, Depends(get_coordinator)],
) -> RevisionResponse:
    """Replace the content of an existing post and return its current slug."""
    revision = await coordinator.update(
        post_id, title=body.title, subtitle=body.subtitle, content=body.content
    )
    return RevisionResponse(id=revision.id, slug=revision.slug)
