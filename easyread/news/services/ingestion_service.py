"""
News Ingestion Service
One pipeline run:
1. Fetch a batch of candidate articles from the news source
2. Skip articles that already exist, lack an image or are too short
3. Enrich admitted articles with the LLM, one at a time
4. Store enriched articles until the per-run budget is reached
5. Log a summary and revalidate downstream views
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

import structlog

from ...config import Settings
from ...core.exceptions import DuplicateArticleError
from ...repositories.article_repository import ArticleRepository
from .admission import AdmissionFilter, RejectionReason
from .enrichment_client import EnrichmentClient, EnrichmentResult
from .revalidation import Revalidator
from .sources.base import CandidateItem, NewsSource

logger = structlog.get_logger(__name__)

LLM_FAILED = "llm_failed"


@dataclass(frozen=True)
class PipelineConfig:
    require_image: bool = False
    min_content_length: int = 200
    articles_per_run: int = 5
    categories: Sequence[str] = ("technology", "science", "health")

    @classmethod
    def from_settings(cls, settings: Settings) -> "PipelineConfig":
        return cls(
            require_image=settings.require_image,
            min_content_length=settings.min_content_length,
            articles_per_run=settings.articles_per_run,
            categories=tuple(settings.category_list),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "require_image": self.require_image,
            "min_content_length": self.min_content_length,
            "articles_per_run": self.articles_per_run,
            "categories": ",".join(self.categories),
        }


def _empty_reasons() -> Dict[str, int]:
    return {
        RejectionReason.ALREADY_EXISTS.value: 0,
        RejectionReason.NO_IMAGE.value: 0,
        RejectionReason.TOO_SHORT.value: 0,
        LLM_FAILED: 0,
    }


@dataclass
class IngestionRunStats:
    total_fetched: int = 0
    processed: int = 0
    skipped: int = 0
    skipped_reasons: Dict[str, int] = field(default_factory=_empty_reasons)
    debug_skipped_items: Optional[List[Dict[str, Any]]] = None

    def record_skip(self, reason: str) -> None:
        self.skipped_reasons[reason] = self.skipped_reasons.get(reason, 0) + 1
        # Items already in storage are tallied by reason only
        if reason != RejectionReason.ALREADY_EXISTS.value:
            self.skipped += 1


class NewsIngestionService:
    """Drives a single ingestion run; items are processed sequentially in fetch order."""

    def __init__(
        self,
        repository: ArticleRepository,
        source: NewsSource,
        enrichment_client: EnrichmentClient,
        config: PipelineConfig,
        revalidator: Optional[Revalidator] = None,
    ):
        self.repository = repository
        self.source = source
        self.enrichment_client = enrichment_client
        self.config = config
        self.revalidator = revalidator or Revalidator()
        self.admission = AdmissionFilter(
            require_image=config.require_image,
            min_content_length=config.min_content_length,
        )

    async def run(self) -> IngestionRunStats:
        """
        Run the pipeline once.

        Raises UpstreamFetchError when the batch cannot be fetched; nothing is
        processed in that case. Storage errors other than a duplicate
        original_id propagate and end the run.
        """
        run_start = datetime.now()
        logger.info("Starting ingestion run", **self.config.as_dict())

        items = await self.source.fetch_latest()
        stats = IngestionRunStats(total_fetched=len(items))

        for item in items:
            if stats.processed >= self.config.articles_per_run:
                break

            decision = self.admission.evaluate(item, self.repository.exists(item.article_id))
            if not decision.accepted:
                if decision.reason is RejectionReason.TOO_SHORT:
                    logger.info(
                        "Skipping short article",
                        title=item.title[:20],
                        content_length=len(item.best_text),
                        min_content_length=self.config.min_content_length,
                    )
                stats.record_skip(decision.reason.value)
                continue

            result = await self.enrichment_client.enrich(item.best_text, item.title)
            if result is None:
                stats.record_skip(LLM_FAILED)
                continue

            try:
                self.repository.create(**self._build_record(item, result))
            except DuplicateArticleError:
                # A concurrent run stored it between our check and our write
                logger.info("Article stored by another run", original_id=item.article_id)
                stats.record_skip(RejectionReason.ALREADY_EXISTS.value)
                continue

            stats.processed += 1

        if stats.skipped > 0:
            stats.debug_skipped_items = [self._preview(item) for item in items[:3]]

        logger.info(
            "Fetch summary",
            total_fetched=stats.total_fetched,
            processed=stats.processed,
            skipped=stats.skipped,
            reasons=stats.skipped_reasons,
            duration_seconds=round((datetime.now() - run_start).total_seconds(), 2),
            **self.config.as_dict(),
        )

        await self.revalidator.revalidate("/")
        return stats

    @staticmethod
    def _build_record(item: CandidateItem, result: EnrichmentResult) -> Dict[str, Any]:
        vocabulary_details = None
        if result.vocabulary_details is not None:
            vocabulary_details = [detail.model_dump() for detail in result.vocabulary_details]

        return {
            "original_id": item.article_id,
            "title": item.title,
            "simplified_text": result.simplified_text,
            "core_vocabulary": list(result.core_vocabulary),
            "chinese_summary": result.chinese_summary,
            "vocabulary_details": vocabulary_details,
            "pub_date": item.pub_date or datetime.now(timezone.utc).replace(tzinfo=None),
            "image_url": item.image_url,
            "category": item.primary_category,
            "source": item.source_id,
            "original_url": item.link,
        }

    @staticmethod
    def _preview(item: CandidateItem) -> Dict[str, Any]:
        return {
            "title": item.title,
            "content_len": len(item.content or item.description or item.title or ""),
            "has_image": bool(item.image_url),
        }
