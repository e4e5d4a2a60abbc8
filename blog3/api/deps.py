"""Shared API dependencies: settings, DB session, coordinator, renderer, auth."""

from __future__ import annotations

import logging
import secrets
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from blog3.config import Settings
from blog3.rendering import PageRenderer
from blog3.services.revision_service import RevisionCoordinator

logger = logging.getLogger(__name__)

security = HTTPBasic(auto_error=False)


def get_settings(request: Request) -> Settings:
    """Get application settings from app state."""
    settings: Settings = request.app.state.settings
    return settings


def get_renderer(request: Request) -> PageRenderer:
    """Get the page renderer from app state."""
    renderer: PageRenderer = request.app.state.renderer
    return renderer


async def get_session(request: Request) -> AsyncGenerator[AsyncSession]:
    """Get a database session."""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield session


def get_coordinator(
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> RevisionCoordinator:
    """Build a revision coordinator bound to the request's session."""
    return RevisionCoordinator(session, timezone=settings.timezone)


async def require_editor(
    settings: Annotated[Settings, Depends(get_settings)],
    credentials: Annotated[HTTPBasicCredentials | None, Depends(security)] = None,
) -> None:
    """Require editor basic auth when credentials are configured. Raises 401 otherwise."""
    if not settings.basic_auth_enabled:
        return
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": f'Basic realm="{settings.basic_auth_realm}"'},
        )
    user_ok = secrets.compare_digest(
        credentials.username.encode("utf-8"), (settings.basic_auth_user or "").encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        credentials.password.encode("utf-8"),
        (settings.basic_auth_password or "").encode("utf-8"),
    )
    if not (user_ok and password_ok):
        logger.warning("Rejected editor credentials for user %r", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
        )
