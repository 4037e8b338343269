from .base import CandidateItem, NewsSource
from .newsdata import NewsDataSource

__all__ = ["CandidateItem", "NewsSource", "NewsDataSource"]
