# geosense/feed/navigator.py
from __future__ import annotations
import logging
import threading
from enum import IntEnum
from typing import Any, Dict, List, Protocol, Sequence

from ..article_filter import normalize_title
from ..config import MAX_FETCH_PAGES
from .history import BatchHistoryStore
from .renderer import Renderer

__all__ = ["Direction", "FeedNavigator"]

logger = logging.getLogger(__name__)


class Direction(IntEnum):
    BACKWARD = -1
    FORWARD = 1


class ArticleSource(Protocol):
    def fetch(self, exclude_titles: Sequence[str] = (), page: int = 1) -> List[Dict[str, Any]]: ...


class FeedNavigator:
    """
    Moves through the batch history and pulls a fresh batch from the gateway
    when stepping forward past the newest one.

    Only one operation runs at a time. A request that arrives while another is
    in flight is dropped, not queued; the in-flight flag is released when the
    operation settles, whatever the outcome.
    """

    def __init__(self, history: BatchHistoryStore, client: ArticleSource, renderer: Renderer,
                 max_fetch_pages: int = MAX_FETCH_PAGES):
        self.history = history
        self.client = client
        self.renderer = renderer
        self.max_fetch_pages = max_fetch_pages
        self._in_flight = threading.Lock()

    @property
    def is_navigating(self) -> bool:
        return self._in_flight.locked()

    # ---------------------------------------------------------------------
    # Public operations
    # ---------------------------------------------------------------------
    def load_feed(self) -> bool:
        """Show the batch at the saved position, or seed history with a first fetch."""
        if not self._in_flight.acquire(blocking=False):
            logger.debug("[Feed] load dropped, navigation in flight")
            return False
        try:
            if self.history.get_history():
                return self._show_at(self.history.get_position(), Direction.FORWARD)

            articles = self.client.fetch([], 1)
            if not articles:
                logger.info("[Feed] initial fetch returned nothing")
                return False
            idx = self.history.append_batch(articles)
            return self._display(articles, idx, Direction.FORWARD)
        finally:
            self._in_flight.release()

    def navigate(self, direction: int) -> bool:
        """Step one batch back or forward. Returns True if a batch was displayed."""
        if not self._in_flight.acquire(blocking=False):
            logger.debug("[Feed] navigate(%s) dropped, navigation in flight", direction)
            return False
        try:
            return self._navigate(Direction.BACKWARD if direction < 0 else Direction.FORWARD)
        finally:
            self._in_flight.release()

    # ---------------------------------------------------------------------
    # Internals
    # ---------------------------------------------------------------------
    def _navigate(self, direction: Direction) -> bool:
        count = len(self.history.get_history())
        idx = self.history.get_position()

        if direction is Direction.BACKWARD:
            if idx > 0:
                return self._show_at(idx - 1, direction)
            return False

        if idx < count - 1:
            return self._show_at(idx + 1, direction)

        fresh = self._fetch_fresh()
        if not fresh:
            logger.info("[Feed] no unseen articles in %s page(s)", self.max_fetch_pages)
            return False
        new_idx = self.history.append_batch(fresh)
        return self._display(fresh, new_idx, direction)

    def _fetch_fresh(self) -> List[Dict[str, Any]]:
        """First page (of at most max_fetch_pages) holding any unseen title wins."""
        seen = self.history.get_seen_titles()
        seen_set = {normalize_title(t) for t in seen}

        for page in range(1, self.max_fetch_pages + 1):
            resp = self.client.fetch(seen, page)
            fresh = [a for a in resp or []
                     if isinstance(a, dict) and a.get("title")
                     and normalize_title(a["title"]) not in seen_set]
            if fresh:
                logger.info("[Feed] page %s -> %s fresh articles", page, len(fresh))
                return fresh
        return []

    def _show_at(self, idx: int, direction: int = Direction.FORWARD) -> bool:
        history = self.history.get_history()
        if not history:
            return False
        clamped = max(0, min(idx, len(history) - 1))
        return self._display(history[clamped], clamped, direction)

    def _display(self, batch: List[Dict[str, Any]], idx: int, direction: int) -> bool:
        # the batch in hand is rendered even if storage did not keep it
        self.renderer.transition_out(direction)
        self.renderer.render(batch)
        self.history.record_shown(batch)
        self.history.set_position(idx)
        return True
