from datetime import datetime

import httpx
import pytest

from easyread.core.exceptions import UpstreamFetchError
from easyread.news.services.sources.base import CandidateItem, parse_pub_date
from easyread.news.services.sources.newsdata import NewsDataSource


def make_source(handler, **kwargs):
    return NewsDataSource(
        api_key="news-key",
        base_url="https://news.example.com/api/1",
        categories=["technology", "science"],
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestNewsDataSource:
    @pytest.mark.asyncio
    async def test_fetch_parses_results(self, news_entry):
        captured = {}

        def handler(request):
            captured["request"] = request
            return httpx.Response(200, json={"status": "success", "results": [news_entry("a1"), news_entry("a2")]})

        items = await make_source(handler).fetch_latest()

        assert [item.article_id for item in items] == ["a1", "a2"]
        request = captured["request"]
        assert request.url.path == "/api/1/news"
        assert request.url.params["apikey"] == "news-key"
        assert request.url.params["language"] == "en"
        assert request.url.params["category"] == "technology,science"

    @pytest.mark.asyncio
    async def test_missing_results_is_empty_batch(self):
        def handler(request):
            return httpx.Response(200, json={"status": "success"})

        assert await make_source(handler).fetch_latest() == []

    @pytest.mark.asyncio
    async def test_unusable_entries_dropped(self, news_entry):
        def handler(request):
            return httpx.Response(200, json={"results": [
                news_entry("a1"),
                news_entry("a2", title=None),
                {"title": "no id"},
                "not an object",
            ]})

        items = await make_source(handler).fetch_latest()

        assert [item.article_id for item in items] == ["a1"]

    @pytest.mark.asyncio
    async def test_non_success_status_raises(self):
        def handler(request):
            return httpx.Response(401, json={"status": "error"})

        with pytest.raises(UpstreamFetchError) as exc_info:
            await make_source(handler).fetch_latest()

        assert exc_info.value.upstream_status == 401
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(UpstreamFetchError):
            await make_source(handler).fetch_latest()

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self):
        def handler(request):
            return httpx.Response(200, text="<html>maintenance</html>")

        with pytest.raises(UpstreamFetchError):
            await make_source(handler).fetch_latest()


class TestCandidateItem:
    def test_from_payload_maps_fields(self, news_entry):
        item = CandidateItem.from_payload(news_entry("x1", category=["science", "health"]))

        assert item.article_id == "x1"
        assert item.categories == ["science", "health"]
        assert item.primary_category == "science"
        assert item.source_id == "example_news"
        assert item.link == "https://example.com/x1"
        assert item.pub_date == datetime(2026, 1, 18, 10, 0, 0)

    def test_defaults_for_missing_optional_fields(self):
        item = CandidateItem.from_payload({"article_id": 7, "title": "Only a title"})

        assert item.article_id == "7"
        assert item.primary_category == "General"
        assert item.pub_date is None
        assert item.image_url is None
        assert item.best_text == "Only a title"

    def test_parse_pub_date(self):
        assert parse_pub_date("2026-01-18T10:00:00Z") == datetime(2026, 1, 18, 10, 0, 0)
        assert parse_pub_date("2026-01-18T12:00:00+02:00") == datetime(2026, 1, 18, 10, 0, 0)
        assert parse_pub_date("yesterday") is None
        assert parse_pub_date(None) is None
