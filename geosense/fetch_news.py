# geosense/fetch_news.py
import json
import logging
from typing import Any, Dict, List, Optional, Set

from .config import NEWS_PAGE_SIZE, newsapi_key
from .errors import ConfigurationError
from .article_filter import clean_articles, normalize_title
from .adapters.newsapi_adapter import get_top_headlines

logger = logging.getLogger(__name__)


def parse_exclude(raw: Optional[str]) -> Set[str]:
    """
    `exclude` query value -> set of normalized titles.
    Accepts a JSON array; if the value is not JSON at all, falls back to a
    comma-separated list. A JSON value that isn't an array excludes nothing.
    """
    if not raw:
        return set()
    try:
        parsed = json.loads(raw)
        titles = parsed if isinstance(parsed, list) else []
    except (ValueError, RecursionError):
        # not JSON (or nested too deep to decode): comma-separated fallback
        titles = [s.strip() for s in str(raw).split(",") if s.strip()]
    out = {normalize_title(t) for t in titles}
    out.discard("")
    return out


def parse_positive_int(raw: Any, default: int) -> int:
    try:
        n = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default


def fetch_filtered_news(exclude: Optional[str] = None,
                        page: Any = None,
                        page_size: Any = None) -> List[Dict[str, Any]]:
    """
    Fetch one page of US top headlines and return at most 4 cleaned articles
    whose titles are not in `exclude`.
    Raises ConfigurationError (no key; upstream never called) or UpstreamError.
    """
    excluded = parse_exclude(exclude)

    api_key = newsapi_key()
    if not api_key:
        raise ConfigurationError("Missing News API key in environment.")

    page_n = parse_positive_int(page, 1)
    size_n = parse_positive_int(page_size, NEWS_PAGE_SIZE)

    data = get_top_headlines(api_key, page=page_n, page_size=size_n)
    articles = data.get("articles")
    if not isinstance(articles, list):
        articles = []

    cleaned = clean_articles(articles, exclude=excluded)
    logger.info("[News] page=%s size=%s raw=%s excluded=%s kept=%s",
                page_n, size_n, len(articles), len(excluded), len(cleaned))
    return cleaned
