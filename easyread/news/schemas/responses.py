"""Read API and ingestion trigger response schemas"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ============================================================================
# Articles
# ============================================================================

class VocabularyDetailOut(CamelModel):
    word: str
    sentence: str


class ArticleOut(CamelModel):
    """A persisted enriched article as exposed by the read API"""
    id: int
    original_id: str
    title: str
    simplified_text: str
    chinese_summary: str
    core_vocabulary: List[str] = []
    vocabulary_details: Optional[List[VocabularyDetailOut]] = None
    pub_date: datetime
    image_url: Optional[str] = None
    category: Optional[str] = None
    source: Optional[str] = None
    original_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ResponseMeta(CamelModel):
    timestamp: str
    version: str = "1.0.0"


class ArticleListResponse(CamelModel):
    success: bool = True
    data: List[ArticleOut]
    pagination: Pagination
    meta: ResponseMeta


class ArticleDetailResponse(CamelModel):
    success: bool = True
    data: ArticleOut
    meta: ResponseMeta


# ============================================================================
# Ingestion trigger
# ============================================================================

class SkippedItemPreview(CamelModel):
    title: str
    content_len: int
    has_image: bool


class RunConfiguration(CamelModel):
    require_image: bool
    min_content_length: int
    articles_per_run: int
    categories: str


class IngestionRunResponse(CamelModel):
    success: bool = True
    message: str
    total_fetched: int
    processed: int
    skipped: int
    skipped_reasons: Dict[str, int]
    debug_skipped_items: Optional[List[SkippedItemPreview]] = Field(default=None, alias="debug_skippedItems")
    configuration: RunConfiguration
