"""Public pages: recent posts index and posts by slug."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from blog3.api.deps import get_coordinator, get_renderer, get_session, get_settings
from blog3.config import Settings
from blog3.rendering import PageRenderer
from blog3.services.post_store import list_recent
from blog3.services.revision_service import Redirect, RevisionCoordinator

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def index_page(
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    renderer: Annotated[PageRenderer, Depends(get_renderer)],
) -> HTMLResponse:
    """List the most recent posts."""
    posts = await list_recent(session, settings.recent_posts_limit)
    return HTMLResponse(renderer.render_index(posts))


@router.get("/{slug}", response_class=HTMLResponse, response_model=None)
async def post_page(
    slug: str,
    coordinator: Annotated[RevisionCoordinator, Depends(get_coordinator)],
    settings: Annotated[Settings, Depends(get_settings)],
    renderer: Annotated[PageRenderer, Depends(get_renderer)],
) -> HTMLResponse | RedirectResponse:
    """Render a post, or redirect a retired slug to its canonical one."""
    result = await coordinator.read_by_slug(slug)
    if isinstance(result, Redirect):
        return RedirectResponse(settings.route(f"/{result.slug}"), status_code=301)
    return HTMLResponse(renderer.render_post(result))
