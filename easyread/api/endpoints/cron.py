from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query

from ...config import Settings, get_settings
from ...core.exceptions import ConfigurationError, CronUnauthorizedError
from ...news.schemas.responses import IngestionRunResponse, RunConfiguration, SkippedItemPreview
from ...news.services.ingestion_service import NewsIngestionService
from ..dependencies import get_ingestion_service

logger = structlog.get_logger(__name__)

router = APIRouter()


def verify_cron_secret(
    secret: Optional[str] = Query(None, description="Shared secret for scheduled runs"),
    settings: Settings = Depends(get_settings),
) -> None:
    # Local development may trigger runs without the secret
    if settings.cron_secret and not settings.is_development:
        if secret != settings.cron_secret:
            logger.warning("Rejected ingestion trigger with invalid secret")
            raise CronUnauthorizedError()


@router.get(
    "/fetch-news",
    response_model=IngestionRunResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(verify_cron_secret)],
)
async def fetch_news(
    settings: Settings = Depends(get_settings),
    ingestion_service: NewsIngestionService = Depends(get_ingestion_service),
):
    """Run one ingestion pass: fetch, filter, enrich and store new articles"""
    if not settings.newsdata_api_key:
        raise ConfigurationError("NEWSDATA_API_KEY not configured")

    stats = await ingestion_service.run()
    config = ingestion_service.config.as_dict()

    return IngestionRunResponse(
        message=f"Processed {stats.processed} new articles",
        total_fetched=stats.total_fetched,
        processed=stats.processed,
        skipped=stats.skipped,
        skipped_reasons=stats.skipped_reasons,
        debug_skipped_items=(
            [SkippedItemPreview(**preview) for preview in stats.debug_skipped_items]
            if stats.debug_skipped_items else None
        ),
        configuration=RunConfiguration(**config),
    )
