"""
NewsData.io adapter
Fetches the latest articles for the configured categories in a single request
"""

from typing import List, Optional, Sequence

import httpx
import structlog

from ....core.exceptions import UpstreamFetchError
from .base import CandidateItem, NewsSource

logger = structlog.get_logger(__name__)


class NewsDataSource(NewsSource):
    name = "newsdata"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://newsdata.io/api/1",
        categories: Sequence[str] = ("technology", "science", "health"),
        language: str = "en",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.categories = list(categories)
        self.language = language
        self.timeout = timeout
        self._transport = transport

    async def fetch_latest(self) -> List[CandidateItem]:
        url = f"{self.base_url}/news"
        params = {
            "apikey": self.api_key or "",
            "language": self.language,
            "category": ",".join(self.categories),
        }

        # The key travels in the query string, never log it
        logger.info("Fetching news", url=url, apikey="HIDDEN_KEY", categories=params["category"])

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error("News API request failed", error_type=type(e).__name__)
            raise UpstreamFetchError(reason=f"transport error: {type(e).__name__}") from e

        if not response.is_success:
            logger.error("News API failed", status_code=response.status_code, body=response.text[:500])
            raise UpstreamFetchError(reason="non-success status", upstream_status=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.error("News API returned invalid JSON")
            raise UpstreamFetchError(reason="invalid JSON body", upstream_status=response.status_code) from e

        if not isinstance(data, dict):
            raise UpstreamFetchError(reason="unexpected body shape", upstream_status=response.status_code)

        results = data.get("results") or []
        if not isinstance(results, list):
            raise UpstreamFetchError(reason="results is not a list", upstream_status=response.status_code)

        items = [item for item in (CandidateItem.from_payload(entry) for entry in results) if item]
        logger.info("Fetched articles from NewsData API", fetched=len(results), usable=len(items))
        return items
