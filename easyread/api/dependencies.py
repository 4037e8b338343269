from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from ..config import Settings, get_settings
from ..core.database import get_db
from ..news.services.access_gate import AccessConfig, AccessGate, client_key_from_headers
from ..news.services.article_service import ArticleService
from ..news.services.enrichment_client import EnrichmentClient, EnrichmentConfig
from ..news.services.ingestion_service import NewsIngestionService, PipelineConfig
from ..news.services.rate_limiter import RateLimitStore
from ..news.services.revalidation import Revalidator
from ..news.services.sources.newsdata import NewsDataSource
from ..repositories.article_repository import ArticleRepository


def get_article_repository(db: Session = Depends(get_db)) -> ArticleRepository:
    return ArticleRepository(db)


def get_rate_limit_store(request: Request) -> RateLimitStore:
    return request.app.state.rate_limit_store


def get_access_gate(
    settings: Settings = Depends(get_settings),
    store: RateLimitStore = Depends(get_rate_limit_store),
) -> AccessGate:
    return AccessGate.from_store(AccessConfig.from_settings(settings), store)


async def require_read_access(
    request: Request,
    x_api_key: Optional[str] = Header(default=None, alias="X-API-Key"),
    gate: AccessGate = Depends(get_access_gate),
) -> None:
    gate.check(api_key=x_api_key, client_key=client_key_from_headers(request.headers))


def get_article_service(
    repository: ArticleRepository = Depends(get_article_repository),
    settings: Settings = Depends(get_settings),
) -> ArticleService:
    return ArticleService(
        repository,
        max_page_size=settings.api_max_page_size,
        default_page_size=settings.api_default_page_size,
    )


def get_pipeline_config(settings: Settings = Depends(get_settings)) -> PipelineConfig:
    return PipelineConfig.from_settings(settings)


def get_ingestion_service(
    repository: ArticleRepository = Depends(get_article_repository),
    settings: Settings = Depends(get_settings),
    config: PipelineConfig = Depends(get_pipeline_config),
) -> NewsIngestionService:
    source = NewsDataSource(
        api_key=settings.newsdata_api_key,
        base_url=settings.newsdata_base_url,
        categories=config.categories,
        language=settings.news_language,
        timeout=settings.news_fetch_timeout_seconds,
    )
    return NewsIngestionService(
        repository=repository,
        source=source,
        enrichment_client=EnrichmentClient(EnrichmentConfig.from_settings(settings)),
        config=config,
        revalidator=Revalidator(webhook_url=settings.revalidate_url),
    )
