"""
Base types for news sources
A source returns one batch of candidate items per ingestion run
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import structlog

from ..content_selector import select_content

logger = structlog.get_logger(__name__)


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def parse_pub_date(value: Any) -> Optional[datetime]:
    """Parse a source timestamp into a naive UTC datetime, or None if unusable."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


@dataclass
class CandidateItem:
    """Raw news entry, not yet admitted or enriched"""
    article_id: str
    title: str
    content: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    pub_date: Optional[datetime] = None
    source_id: Optional[str] = None
    link: Optional[str] = None

    @property
    def best_text(self) -> str:
        return select_content(self.content, self.description, self.title)

    @property
    def primary_category(self) -> str:
        return self.categories[0] if self.categories else "General"

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> Optional["CandidateItem"]:
        """Build an item from one source entry; entries without id or title are unusable."""
        if not isinstance(payload, dict):
            return None

        article_id = payload.get("article_id")
        title = _text(payload.get("title"))
        if article_id is None or str(article_id) == "" or not title:
            logger.debug("Dropping news entry without id or title", article_id=article_id)
            return None

        raw_categories = payload.get("category") or []
        if isinstance(raw_categories, str):
            raw_categories = [raw_categories]
        categories = [c for c in raw_categories if isinstance(c, str) and c]

        return cls(
            article_id=str(article_id),
            title=title,
            content=_text(payload.get("content")),
            description=_text(payload.get("description")),
            image_url=_text(payload.get("image_url")),
            categories=categories,
            pub_date=parse_pub_date(payload.get("pubDate")),
            source_id=_text(payload.get("source_id")),
            link=_text(payload.get("link")),
        )


class NewsSource(ABC):
    """Base adapter for news sources"""

    name: str = "news_source"

    @abstractmethod
    async def fetch_latest(self) -> List[CandidateItem]:
        """Fetch one batch of candidate items; raises UpstreamFetchError on failure"""
        pass
