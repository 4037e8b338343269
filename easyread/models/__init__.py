from .article import EnrichedArticle

__all__ = ["EnrichedArticle"]
