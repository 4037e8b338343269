"""
Read-only Article Service for API endpoints
Handles only database reads - ingestion happens in the cron pipeline
"""

import math
from datetime import datetime, timezone
from typing import Optional

from ...core.exceptions import ArticleNotFoundError
from ...repositories.article_repository import ArticleRepository
from ..schemas.responses import (
    ArticleDetailResponse,
    ArticleListResponse,
    ArticleOut,
    Pagination,
    ResponseMeta,
)

API_VERSION = "1.0.0"


def _meta() -> ResponseMeta:
    return ResponseMeta(timestamp=datetime.now(timezone.utc).isoformat(), version=API_VERSION)


class ArticleService:
    def __init__(self, repository: ArticleRepository, max_page_size: int = 50, default_page_size: int = 10):
        self.repository = repository
        self.max_page_size = max_page_size
        self.default_page_size = default_page_size

    def clamp_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            limit = self.default_page_size
        return max(1, min(limit, self.max_page_size))

    def list_articles(
        self,
        page: int = 1,
        limit: Optional[int] = None,
        category: Optional[str] = None
    ) -> ArticleListResponse:
        """Newest first, optionally filtered by exact category."""
        page = max(1, page)
        limit = self.clamp_limit(limit)
        offset = (page - 1) * limit

        articles, total = self.repository.list_page(offset=offset, limit=limit, category=category or None)

        return ArticleListResponse(
            data=[ArticleOut.model_validate(article) for article in articles],
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                total_pages=math.ceil(total / limit),
            ),
            meta=_meta(),
        )

    def get_article(self, article_id: int) -> ArticleDetailResponse:
        article = self.repository.get_by_id(article_id)
        if not article:
            raise ArticleNotFoundError(article_id)
        return ArticleDetailResponse(data=ArticleOut.model_validate(article), meta=_meta())
