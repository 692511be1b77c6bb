# geosense/article_filter.py
from __future__ import annotations
import re
from typing import Any, Dict, Iterable, List, Optional

from .config import NEWS_RENDER_LIMIT, NEWS_MIN_TEXT_LENGTH

__all__ = ["normalize_title", "normalize_article", "strip_truncation_marker", "clean_articles"]

# NewsAPI cuts `content` and appends e.g. " [+3412 chars]"
_TRUNCATION_RE = re.compile(r"(?:\s*\[\+\d+\s+chars\])+$", re.IGNORECASE)

_TEXT_FIELDS = ("title", "description", "url", "urlToImage", "publishedAt", "content")


def normalize_title(title: Any) -> str:
    return str(title or "").strip().lower()


def strip_truncation_marker(content: str) -> str:
    return _TRUNCATION_RE.sub("", content or "")


def _source_name(src: Any) -> Optional[str]:
    # provider shape is {"id": ..., "name": ...}; already-cleaned articles carry the name
    if isinstance(src, dict):
        return src.get("name") or None
    if isinstance(src, str) and src:
        return src
    return None


def normalize_article(raw: Any) -> Dict[str, Any]:
    """
    Coerce one provider article (possibly None or partial) into the Article shape:
    source/author default to None, text fields to "".
    """
    a = raw if isinstance(raw, dict) else {}
    out: Dict[str, Any] = {
        "source": _source_name(a.get("source")),
        "author": a.get("author") or None,
    }
    for field in _TEXT_FIELDS:
        val = a.get(field) or ""
        out[field] = val if isinstance(val, str) else str(val)
    out["content"] = strip_truncation_marker(out["content"])
    # keep key order stable for JSON output
    return {k: out[k] for k in ("source", "author", "title", "description",
                                "url", "urlToImage", "publishedAt", "content")}


def _has_substance(article: Dict[str, Any], min_length: int) -> bool:
    text = (article["content"] or article["description"] or "").strip()
    return len(text) >= min_length


def clean_articles(
    raw_articles: Optional[Iterable[Any]],
    exclude: Iterable[str] = (),
    limit: int = NEWS_RENDER_LIMIT,
    min_text_length: int = NEWS_MIN_TEXT_LENGTH,
) -> List[Dict[str, Any]]:
    """
    Normalize -> strip truncation marker -> drop thin articles ->
    drop untitled/excluded titles (case-insensitive) -> keep the first `limit`.
    `exclude` is matched against normalize_title(); pass it pre-normalized or raw.
    """
    excluded = {normalize_title(t) for t in (exclude or [])}
    excluded.discard("")

    kept: List[Dict[str, Any]] = []
    for raw in raw_articles or []:
        if len(kept) >= limit:
            break
        article = normalize_article(raw)
        if not _has_substance(article, min_text_length):
            continue
        key = normalize_title(article["title"])
        if not key or key in excluded:
            continue
        kept.append(article)
    return kept
