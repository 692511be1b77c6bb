# geosense/feed/history.py
from __future__ import annotations
import json
import logging
import re
from typing import Any, Dict, Iterable, List, Set

from ..article_filter import normalize_title
from .storage import KeyValueStore

__all__ = ["BatchHistoryStore", "TITLES_KEY", "HISTORY_KEY", "HISTORY_INDEX_KEY"]

logger = logging.getLogger(__name__)

TITLES_KEY        = "gs.news.titles"
HISTORY_KEY       = "gs.news.history"       # List[Batch], Batch = List[Article]
HISTORY_INDEX_KEY = "gs.news.history.idx"   # current index into history

_LEADING_INT_RE = re.compile(r"\s*\+?(\d+)")

Article = Dict[str, Any]
Batch = List[Article]


def _read_json_list(store: KeyValueStore, key: str) -> list:
    try:
        parsed = json.loads(store.get_item(key) or "[]")
    except ValueError:
        logger.warning("[Store] corrupt %s, treating as empty", key)
        return []
    return parsed if isinstance(parsed, list) else []


class BatchHistoryStore:
    """
    Append-only log of shown batches, the index of the batch on screen and the
    accumulated seen titles. Each piece is persisted under its own key; bad or
    missing values read as defaults.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    # ---------- history ----------
    def get_history(self) -> List[Batch]:
        # a damaged entry still occupies its slot so indices stay valid
        return [b if isinstance(b, list) else [] for b in _read_json_list(self.store, HISTORY_KEY)]

    def _set_history(self, history: List[Batch]) -> None:
        self.store.set_item(HISTORY_KEY, json.dumps(history, ensure_ascii=False))

    def append_batch(self, batch: Batch) -> int:
        """Push `batch` as the newest entry and make it current. Returns its index."""
        history = self.get_history()
        history.append(list(batch))
        self._set_history(history)
        idx = len(history) - 1
        self.set_position(idx)
        return idx

    # ---------- position ----------
    def get_position(self) -> int:
        # leading digits win, as parseInt does: "3abc" -> 3, "-2" / "NaN" -> 0
        m = _LEADING_INT_RE.match(self.store.get_item(HISTORY_INDEX_KEY) or "")
        return int(m.group(1)) if m else 0

    def set_position(self, idx: int) -> None:
        self.store.set_item(HISTORY_INDEX_KEY, str(int(idx)))

    # ---------- seen titles ----------
    def get_seen_titles(self) -> List[str]:
        return [t for t in _read_json_list(self.store, TITLES_KEY) if t and isinstance(t, str)]

    def set_seen_titles(self, titles: Iterable[str]) -> None:
        self.store.set_item(TITLES_KEY, json.dumps([t for t in titles if t], ensure_ascii=False))

    def seen_title_set(self) -> Set[str]:
        return {normalize_title(t) for t in self.get_seen_titles()}

    def record_shown(self, batch: Batch) -> int:
        """
        Union the batch's titles into the seen list. Comparison is on the
        normalized title; the first spelling seen is the one kept.
        Returns how many titles were new.
        """
        titles = self.get_seen_titles()
        known = {normalize_title(t) for t in titles}
        added = 0
        for article in batch or []:
            title = article.get("title") if isinstance(article, dict) else None
            key = normalize_title(title)
            if not key or key in known:
                continue
            known.add(key)
            titles.append(str(title))
            added += 1
        if added:
            self.set_seen_titles(titles)
        return added

    # ---------- reset ----------
    def clear(self) -> None:
        for key in (TITLES_KEY, HISTORY_KEY, HISTORY_INDEX_KEY):
            self.store.remove_item(key)
