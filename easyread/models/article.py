from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from sqlalchemy.sql import func

from ..core.database import Base


class EnrichedArticle(Base):
    """
    A news article rewritten for beginner English learners.
    Created once by an ingestion run and never updated afterwards.
    """
    __tablename__ = "enriched_articles"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Deduplication key from the news source
    original_id = Column(String(255), nullable=False, unique=True)

    # Enriched content
    title = Column(String(500), nullable=False)
    simplified_text = Column(Text, nullable=False)
    chinese_summary = Column(Text, nullable=False)
    core_vocabulary = Column(JSON, nullable=False, default=list)
    vocabulary_details = Column(JSON)  # [{"word": ..., "sentence": ...}]

    # Provenance
    pub_date = Column(DateTime, nullable=False, index=True)
    image_url = Column(String(1000))
    category = Column(String(100), index=True)
    source = Column(String(200))
    original_url = Column(String(1000))

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<EnrichedArticle(id={self.id}, original_id='{self.original_id}', title='{self.title[:50]}...')>"
