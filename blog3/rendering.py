"""HTML rendering of posts and the index page."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from jinja2 import Environment, PackageLoader, TemplateError, select_autoescape

from blog3.services.datetime_service import format_iso

if TYPE_CHECKING:
    from collections.abc import Sequence

    from blog3.services.post_store import RecentPost
    from blog3.services.revision_service import PostPage

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = "page.html.j2"
INDEX_TEMPLATE = "index.html.j2"


class RenderError(Exception):
    """Raised when a template fails to render."""


class PageRenderer(Protocol):
    """What the page routes need from a renderer."""

    def render_post(self, page: PostPage) -> str: ...

    def render_index(self, posts: Sequence[RecentPost]) -> str: ...


class JinjaPageRenderer:
    """Render pages from the package's Jinja templates.

    With ``auto_reload`` on, edited templates are picked up on the next
    render without a restart.
    """

    def __init__(self, page_root: str, *, auto_reload: bool = False) -> None:
        self.page_root = page_root
        self._env = Environment(
            loader=PackageLoader("blog3", "templates"),
            autoescape=select_autoescape(["html", "j2"]),
            auto_reload=auto_reload,
            keep_trailing_newline=True,
        )
        self._env.filters["iso"] = format_iso

    def _render(self, name: str, **context: object) -> str:
        try:
            template = self._env.get_template(name)
            return template.render(page_root=self.page_root, **context)
        except TemplateError as exc:
            logger.error("Failed to render %s: %s", name, exc)
            raise RenderError(f"Failed to render {name}") from exc

    def render_post(self, page: PostPage) -> str:
        paragraphs = [p for p in page.post.content.split("\n\n") if p.strip()]
        return self._render(PAGE_TEMPLATE, post=page.post, slug=page.slug, paragraphs=paragraphs)

    def render_index(self, posts: Sequence[RecentPost]) -> str:
        return self._render(INDEX_TEMPLATE, posts=posts)
