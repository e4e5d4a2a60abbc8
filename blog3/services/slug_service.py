"""Slug generation for post URLs."""

from __future__ import annotations

from typing import TYPE_CHECKING

import grapheme
from slugify import slugify

if TYPE_CHECKING:
    from datetime import datetime

MAX_TITLE_CHARS = 26


def generate_slug(title: str, published: datetime) -> str:
    """Generate the base slug for a post from its title and publish date.

    - Keep the first 26 characters of the title (grapheme clusters, so an
      accented letter or a multi-code-point emoji is never split)
    - Transliterate to ASCII, lowercase, collapse everything else to hyphens
    - Append ``-YYYY-MM-DD`` taken from ``published`` in its own offset

    A title with nothing sluggable left yields just the date part.
    """
    short = grapheme.slice(title, 0, MAX_TITLE_CHARS)
    text = slugify(short, separator="-", lowercase=True)
    suffix = f"{published.year:04d}-{published.month:02d}-{published.day:02d}"
    if not text:
        return suffix
    return f"{text}-{suffix}"
