"""View Cache — process-local cache of rendered dashboard views keyed by path.

Invariants:
    - revalidate(path) drops every cached rendering of that view (all query variants)
    - revalidate is fire-and-forget: it never raises and returns nothing to await
    - Cached payloads are returned as stored; callers must not mutate them

Design Decisions:
    - Owned by the app lifespan (app.state.view_cache), injected via get_view_cache
    - Keyed by (path, variant) so the list view's query/page combinations are
      invalidated together by a single path
    - No synchronization with writes: a reader may see the old rendering until
      revalidate runs (single-process uvicorn)
"""

import logging
from typing import Any

from fastapi import Request

logger = logging.getLogger(__name__)


class ViewCache:
    """Rendered view payloads keyed by view path and variant."""

    def __init__(self):
        self._entries: dict[str, dict[str, Any]] = {}

    def get(self, path: str, variant: str = "") -> Any | None:
        return self._entries.get(path, {}).get(variant)

    def put(self, path: str, payload: Any, variant: str = "") -> None:
        self._entries.setdefault(path, {})[variant] = payload

    def revalidate(self, path: str) -> None:
        """Invalidate all cached renderings of `path`."""
        dropped = self._entries.pop(path, None)
        logger.debug(
            f"Revalidated view {path} ({len(dropped or {})} entries dropped)",
            extra={"path": path},
        )

    def __contains__(self, path: str) -> bool:
        return bool(self._entries.get(path))


def get_view_cache(request: Request) -> ViewCache:
    """FastAPI dependency for the process-wide view cache."""
    return request.app.state.view_cache
