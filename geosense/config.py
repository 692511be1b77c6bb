# -----------------------------
# config.py · GeoSense News Feed
# -----------------------------
import os
from typing import List

# ---------- helpers ----------
def _get_str(name: str, default: str) -> str:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return val.strip()

def _get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, "").strip())
    except Exception:
        return default

def _csv(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if not raw:
        return default
    return [s.strip() for s in raw.split(",") if s.strip()]

# ============ NEWS PROVIDER ============
NEWSAPI_URL     = _get_str("NEWSAPI_URL", "https://newsapi.org/v2/top-headlines")
NEWS_COUNTRY    = _get_str("NEWS_COUNTRY", "us")
NEWS_PAGE_SIZE  = _get_int("NEWS_PAGE_SIZE", 30)
NEWS_TIMEOUT    = _get_int("NEWS_TIMEOUT", 10)    # seconds, upstream call only

def newsapi_key() -> str:
    """Read per request so a key added to the environment is picked up without a restart."""
    return (os.getenv("NEWSAPI_ACCESS_KEY") or "").strip()

# ============ FILTER / FEED ============
NEWS_RENDER_LIMIT    = _get_int("NEWS_RENDER_LIMIT", 4)      # articles per batch
NEWS_MIN_TEXT_LENGTH = _get_int("NEWS_MIN_TEXT_LENGTH", 20)  # reject stub/teaser payloads
MAX_FETCH_PAGES      = _get_int("MAX_FETCH_PAGES", 3)        # pages tried for a fresh batch

# ============ HTTP ============
CORS_ORIGINS = _csv("CORS_ORIGINS", ["*"])

# ============ READER (client side) ============
GATEWAY_URL = _get_str("GEOSENSE_GATEWAY_URL", "http://localhost:8000/news")
STATE_PATH  = _get_str("GEOSENSE_STATE_PATH", ".geosense/state.json")
