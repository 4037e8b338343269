from dataclasses import dataclass
from typing import Mapping, Optional

import structlog

from ...config import Settings
from ...core.exceptions import ApiDisabledError, InvalidApiKeyError, RateLimitExceededError
from .rate_limiter import FixedWindowRateLimiter, RateLimitStore, describe_window

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AccessConfig:
    api_enabled: bool = True
    api_key_required: bool = False
    api_key: Optional[str] = None
    rate_limit: int = 100
    rate_limit_window_seconds: int = 3600

    @classmethod
    def from_settings(cls, settings: Settings) -> "AccessConfig":
        return cls(
            api_enabled=settings.api_enabled,
            api_key_required=settings.api_key_required,
            api_key=settings.api_key,
            rate_limit=settings.api_rate_limit,
            rate_limit_window_seconds=settings.api_rate_limit_window_seconds,
        )


def client_key_from_headers(headers: Mapping[str, str]) -> str:
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return headers.get("x-real-ip") or "unknown"


class AccessGate:
    """Enabled flag, then API key, then rate limit. The first failing check wins."""

    def __init__(self, config: AccessConfig, limiter: FixedWindowRateLimiter):
        self.config = config
        self.limiter = limiter

    @classmethod
    def from_store(cls, config: AccessConfig, store: RateLimitStore) -> "AccessGate":
        limiter = FixedWindowRateLimiter(
            limit=config.rate_limit,
            window_seconds=config.rate_limit_window_seconds,
            store=store,
        )
        return cls(config, limiter)

    def check(self, api_key: Optional[str], client_key: str) -> None:
        if not self.config.api_enabled:
            raise ApiDisabledError()

        if self.config.api_key_required:
            if not api_key or api_key != self.config.api_key:
                logger.info("Rejected request with invalid API key", client=client_key)
                raise InvalidApiKeyError()

        if not self.limiter.hit(client_key):
            logger.info("Rate limit exceeded", client=client_key, limit=self.config.rate_limit)
            raise RateLimitExceededError(
                limit=self.config.rate_limit,
                window=describe_window(self.config.rate_limit_window_seconds),
            )
