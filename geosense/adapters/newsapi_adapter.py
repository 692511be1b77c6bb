# geosense/adapters/newsapi_adapter.py
import logging
import requests

from ..config import NEWSAPI_URL, NEWS_COUNTRY, NEWS_TIMEOUT
from ..errors import UpstreamError

logger = logging.getLogger(__name__)

UA = {"User-Agent": "Mozilla/5.0 (GeoSense-NewsBot/1.0)"}


def _error_details(resp: requests.Response):
    try:
        return resp.json() if resp.text else resp.reason
    except ValueError:
        return resp.text[:300]


def get_top_headlines(api_key: str, page: int = 1, page_size: int = 30,
                      country: str = NEWS_COUNTRY, timeout: float = NEWS_TIMEOUT) -> dict:
    """
    One call to NewsAPI /v2/top-headlines. Never retried: any failure is raised
    as UpstreamError carrying the provider's status and payload (or the message).
    """
    params = {"country": country, "pageSize": page_size, "page": page, "apiKey": api_key}
    try:
        r = requests.get(NEWSAPI_URL, params=params, headers=UA, timeout=timeout)
    except requests.Timeout as e:
        logger.warning("[News] upstream timed out after %ss (page=%s)", timeout, page)
        raise UpstreamError(f"NewsAPI timed out: {e}", details=str(e)) from e
    except requests.RequestException as e:
        logger.warning("[News] upstream unreachable: %s", e)
        raise UpstreamError(f"NewsAPI request failed: {e}", details=str(e)) from e

    if r.status_code >= 400:
        details = _error_details(r)
        logger.warning("[News] upstream %s: %s", r.status_code, str(details)[:300])
        raise UpstreamError(f"NewsAPI returned {r.status_code}", status=r.status_code, details=details)

    try:
        data = r.json() if r.text else {}
    except ValueError as e:
        raise UpstreamError("NewsAPI returned a non-JSON body",
                            details=r.text[:300]) from e
    return data if isinstance(data, dict) else {}
