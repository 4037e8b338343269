from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query

from ...news.schemas.responses import ArticleDetailResponse, ArticleListResponse
from ...news.services.article_service import ArticleService
from ..dependencies import get_article_service, require_read_access

logger = structlog.get_logger(__name__)

router = APIRouter(dependencies=[Depends(require_read_access)])


@router.get("", response_model=ArticleListResponse)
async def list_articles(
    page: int = Query(1, description="Page number, starting at 1"),
    limit: Optional[int] = Query(None, description="Articles per page (capped at the configured maximum)"),
    category: Optional[str] = Query(None, description="Exact category filter"),
    article_service: ArticleService = Depends(get_article_service),
):
    """Paginated enriched articles, newest first"""
    return article_service.list_articles(page=page, limit=limit, category=category)


@router.get("/{article_id}", response_model=ArticleDetailResponse)
async def get_article(
    article_id: int,
    article_service: ArticleService = Depends(get_article_service),
):
    return article_service.get_article(article_id)
