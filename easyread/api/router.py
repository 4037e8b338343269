from fastapi import APIRouter

from .endpoints import articles, cron

api_router = APIRouter()

# Public read API - guarded by the access gate (e.g. /api/articles?page=1)
api_router.include_router(articles.router, prefix="/articles", tags=["articles"])

# Scheduled ingestion trigger (e.g. /api/cron/fetch-news?secret=...)
api_router.include_router(cron.router, prefix="/cron", tags=["ingestion"])
