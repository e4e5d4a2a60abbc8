"""Application-level exception types.

Convention:
- ``InternalServerError`` — for errors whose details must never reach clients.
  The global handler logs the full message at ERROR and returns a generic
  "Internal server error" (500) to the client.
- ``StorageError`` — a database read or write failed inside a revision. The
  transaction is abandoned, so nothing it wrote is visible.
- ``InconsistentStateError`` — a slug names a post that does not exist. This
  is a bug signal, logged with a ``[BUG]`` prefix.
- ``NotFoundError`` — the requested post id or slug was never issued. The
  handler returns 404 without logging at ERROR.

Every error records the ``Operation`` it was raised from so the boundary can
tell a failed publish from a failed read without parsing messages.
"""

from __future__ import annotations

import enum


class Operation(enum.Enum):
    """Operations served by the revision coordinator."""

    PUBLISH = "publish"
    UPDATE = "update"
    READ_BY_SLUG = "read_by_slug"


class InternalServerError(Exception):
    """Raised for internal errors whose details must not be exposed to clients.

    The global exception handler in ``blog3/main.py`` catches this, logs
    the full message server-side, and returns HTTP 500 with a generic
    ``"Internal server error"`` detail.
    """


class StorageError(InternalServerError):
    """A store operation failed and the surrounding transaction was rolled back."""

    def __init__(self, operation: Operation, message: str, **context: object) -> None:
        self.operation = operation
        self.context = context
        details = ", ".join(f"{key}={value}" for key, value in context.items())
        super().__init__(f"{operation.value}: {message}" + (f" ({details})" if details else ""))


class InconsistentStateError(InternalServerError):
    """A slug resolved to a post id with no post row."""

    def __init__(self, operation: Operation, slug: str, post_id: object) -> None:
        self.operation = operation
        self.slug = slug
        self.post_id = post_id
        super().__init__(f"{operation.value}: slug {slug!r} points at missing post {post_id}")


class NotFoundError(Exception):
    """The requested post or slug does not exist."""

    def __init__(self, operation: Operation, key: object) -> None:
        self.operation = operation
        self.key = key
        super().__init__(f"{operation.value}: {key} not found")
