from .article_repository import ArticleRepository

__all__ = ["ArticleRepository"]
