# geosense/feed/news_client.py
import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import requests

logger = logging.getLogger(__name__)


class NewsClient:
    """
    Client for the gateway's GET /news. Failures never raise: the feed simply
    gets no articles. No timeout unless one is passed; the gateway bounds its
    own upstream call.
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None):
        self.base_url = base_url
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self, exclude_titles: Sequence[str] = (), page: int = 1) -> List[Dict[str, Any]]:
        params = {}
        if exclude_titles:
            params["exclude"] = json.dumps(list(exclude_titles), ensure_ascii=False)
        if page > 1:
            params["page"] = str(page)

        try:
            r = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("[Feed] gateway unreachable: %s", e)
            return []
        if not r.ok:
            logger.warning("[Feed] gateway returned %s", r.status_code)
            return []
        try:
            data = r.json()
        except ValueError:
            logger.warning("[Feed] gateway returned a non-JSON body")
            return []

        articles = data.get("articles") if isinstance(data, dict) else None
        return articles if isinstance(articles, list) else []

    def close(self) -> None:
        self.session.close()
