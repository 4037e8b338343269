from typing import Any, List, Optional, Tuple

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.exceptions import DuplicateArticleError
from ..models.article import EnrichedArticle


class ArticleRepository:
    def __init__(self, db: Session):
        self.db = db

    def exists(self, original_id: str) -> bool:
        return self.db.query(EnrichedArticle.id).filter(
            EnrichedArticle.original_id == original_id
        ).first() is not None

    def create(self, **fields: Any) -> EnrichedArticle:
        article = EnrichedArticle(**fields)
        self.db.add(article)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # Only a clash on original_id is an expected outcome; anything else is a real storage failure
            if self.exists(fields.get("original_id")):
                raise DuplicateArticleError(fields.get("original_id"))
            raise
        self.db.refresh(article)
        return article

    def get_by_id(self, article_id: int) -> Optional[EnrichedArticle]:
        return self.db.query(EnrichedArticle).filter(EnrichedArticle.id == article_id).first()

    def list_page(
        self,
        offset: int,
        limit: int,
        category: Optional[str] = None
    ) -> Tuple[List[EnrichedArticle], int]:
        query = self.db.query(EnrichedArticle)
        if category:
            query = query.filter(EnrichedArticle.category == category)

        total = query.count()
        if offset >= total:
            # Past the last page; also keeps huge offsets away from the driver
            return [], total

        articles = (
            query.order_by(desc(EnrichedArticle.pub_date), desc(EnrichedArticle.id))
            .offset(offset)
            .limit(limit)
            .all()
        )
        return articles, total
