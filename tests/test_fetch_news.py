"""News gateway - unit tests"""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests
from fastapi.testclient import TestClient

from geosense.fetch_news import parse_exclude, parse_positive_int
from geosense.main import app

GET = "geosense.adapters.newsapi_adapter.requests.get"
NEWSAPI = "https://newsapi.org/v2/top-headlines"

client = TestClient(app)


def ok_response(payload):
    r = MagicMock()
    r.status_code = 200
    r.text = json.dumps(payload)
    r.json.return_value = payload
    return r


def error_response(status, payload):
    r = MagicMock()
    r.status_code = status
    r.text = json.dumps(payload)
    r.reason = "Bad Request"
    r.json.return_value = payload
    return r


def art(title, content="content ok 1234567890"):
    return {"source": {"name": "A"}, "title": title, "description": "desc ok",
            "url": "u", "urlToImage": "img", "publishedAt": "d", "content": content}


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("NEWSAPI_ACCESS_KEY", "test-news-key")


class TestParseExclude:
    """Exclude query parsing"""

    def test_json_array(self):
        assert parse_exclude('["T2", " t3 "]') == {"t2", "t3"}

    def test_csv_fallback(self):
        assert parse_exclude("T2, t3") == {"t2", "t3"}

    def test_not_json_is_harmless(self):
        """Unparseable input becomes a single literal title, never an error"""
        assert parse_exclude("not-json") == {"not-json"}

    def test_deeply_nested_falls_back(self):
        """Nesting too deep to decode is treated like any other non-JSON value"""
        raw = "[" * 5000
        assert parse_exclude(raw) == {raw}

    def test_json_non_array_excludes_nothing(self):
        assert parse_exclude('{"a": 1}') == set()
        assert parse_exclude("5") == set()

    def test_empty(self):
        assert parse_exclude(None) == set()
        assert parse_exclude("") == set()
        assert parse_exclude('["", null]') == set()


class TestParsePositiveInt:
    """page/pageSize parsing"""

    def test_valid(self):
        assert parse_positive_int("2", 1) == 2

    def test_invalid_falls_back(self):
        for raw in (None, "", "0", "-3", "abc", "1.5"):
            assert parse_positive_int(raw, 30) == 30


class TestNewsEndpoint:
    """GET /news"""

    def test_missing_key_returns_500_without_upstream_call(self, monkeypatch):
        monkeypatch.delenv("NEWSAPI_ACCESS_KEY", raising=False)
        with patch(GET) as get:
            res = client.get("/news")
        assert res.status_code == 500
        assert res.headers["content-type"].startswith("application/json")
        assert "missing news api key" in res.json()["error"].lower()
        get.assert_not_called()

    def test_success_calls_newsapi_with_defaults(self, api_key):
        articles = [art("T1", "hello world [+100 chars]"), art("T3"), art("T4")]
        with patch(GET, return_value=ok_response({"articles": articles})) as get:
            res = client.get("/news")

        args, kwargs = get.call_args
        assert args[0] == NEWSAPI
        assert kwargs["params"] == {"country": "us", "pageSize": 30, "page": 1, "apiKey": "test-news-key"}
        assert kwargs["timeout"] == 10

        assert res.status_code == 200
        body = res.json()
        assert [a["title"] for a in body["articles"]] == ["T3", "T4"]
        for a in body["articles"]:
            assert set(a) == {"source", "author", "title", "description",
                              "url", "urlToImage", "publishedAt", "content"}

    def test_forwards_pagination(self, api_key):
        with patch(GET, return_value=ok_response({"articles": []})) as get:
            res = client.get("/news", params={"page": "2", "pageSize": "50"})
        assert res.status_code == 200
        params = get.call_args.kwargs["params"]
        assert params["page"] == 2
        assert params["pageSize"] == 50

    def test_invalid_pagination_uses_defaults(self, api_key):
        with patch(GET, return_value=ok_response({"articles": []})) as get:
            client.get("/news", params={"page": "zero", "pageSize": "-1"})
        params = get.call_args.kwargs["params"]
        assert (params["page"], params["pageSize"]) == (1, 30)

    def test_missing_articles_array(self, api_key):
        with patch(GET, return_value=ok_response({"status": "ok"})):
            res = client.get("/news")
        assert res.status_code == 200
        assert res.json() == {"articles": []}

    def test_json_exclude(self, api_key):
        articles = [art("Keep Me"), art("T2"), art("t2"), art("T3")]
        with patch(GET, return_value=ok_response({"articles": articles})):
            res = client.get("/news", params={"exclude": json.dumps(["T2", "t3"])})
        assert [a["title"] for a in res.json()["articles"]] == ["Keep Me"]

    def test_csv_exclude(self, api_key):
        articles = [art("Keep Me"), art("T2"), art("t3")]
        with patch(GET, return_value=ok_response({"articles": articles})):
            res = client.get("/news", params={"exclude": "T2, t3"})
        assert [a["title"] for a in res.json()["articles"]] == ["Keep Me"]

    def test_malformed_exclude_ignored(self, api_key):
        articles = [art("Alpha"), art("Beta")]
        with patch(GET, return_value=ok_response({"articles": articles})):
            res = client.get("/news", params={"exclude": "not-json"})
        assert res.status_code == 200
        assert [a["title"] for a in res.json()["articles"]] == ["Alpha", "Beta"]

    def test_deeply_nested_exclude_is_not_an_error(self, api_key):
        with patch(GET, return_value=ok_response({"articles": [art("Alpha")]})):
            res = client.get("/news", params={"exclude": "[" * 5000})
        assert res.status_code == 200
        assert [a["title"] for a in res.json()["articles"]] == ["Alpha"]

    def test_upstream_error_status_and_details(self, api_key):
        with patch(GET, return_value=error_response(400, {"code": "parametersMissing"})):
            res = client.get("/news")
        assert res.status_code == 400
        body = res.json()
        assert "failed to fetch news" in body["error"].lower()
        assert body["details"] == {"code": "parametersMissing"}

    def test_timeout_is_500_and_not_retried(self, api_key):
        with patch(GET, side_effect=requests.Timeout("read timed out")) as get:
            res = client.get("/news")
        assert res.status_code == 500
        assert "timed out" in res.json()["details"]
        assert get.call_count == 1

    def test_connection_error_is_500(self, api_key):
        with patch(GET, side_effect=requests.ConnectionError("boom")):
            res = client.get("/news")
        assert res.status_code == 500
        assert res.json()["details"] == "boom"


class TestHealth:
    """GET /health"""

    def test_ok(self):
        assert client.get("/health").json() == {"status": "ok"}
