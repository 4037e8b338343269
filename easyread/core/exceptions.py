from typing import Optional, Dict, Any


class EasyReadError(Exception):
    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, **self.details}


class ConfigurationError(EasyReadError):
    pass


class UpstreamFetchError(EasyReadError):
    """The news source could not be reached or answered with a non-2xx status."""
    status_code = 502

    def __init__(self, reason: str, upstream_status: Optional[int] = None):
        super().__init__(message="News Data API failed", error_code="UPSTREAM_FETCH_FAILED")
        self.reason = reason
        self.upstream_status = upstream_status


class EnrichmentError(EasyReadError):
    pass


class DuplicateArticleError(EasyReadError):
    status_code = 409

    def __init__(self, original_id: str):
        super().__init__(
            message=f"Article {original_id} already exists",
            error_code="ARTICLE_ALREADY_EXISTS",
        )
        self.original_id = original_id


class ArticleNotFoundError(EasyReadError):
    status_code = 404

    def __init__(self, article_id: int):
        super().__init__(message="Article not found", error_code="ARTICLE_NOT_FOUND")
        self.article_id = article_id


class AccessDeniedError(EasyReadError):
    pass


class ApiDisabledError(AccessDeniedError):
    status_code = 403

    def __init__(self):
        super().__init__(message="API access is disabled", error_code="API_DISABLED")


class InvalidApiKeyError(AccessDeniedError):
    status_code = 401

    def __init__(self):
        super().__init__(message="Invalid or missing API key", error_code="INVALID_API_KEY")


class RateLimitExceededError(AccessDeniedError):
    status_code = 429

    def __init__(self, limit: int, window: str):
        super().__init__(
            message="Rate limit exceeded",
            error_code="RATE_LIMITED",
            details={"limit": limit, "window": window},
        )


class CronUnauthorizedError(AccessDeniedError):
    status_code = 401

    def __init__(self):
        super().__init__(message="Unauthorized", error_code="CRON_UNAUTHORIZED")
