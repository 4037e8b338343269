from typing import Optional

import httpx
import structlog

logger = structlog.get_logger(__name__)


class Revalidator:
    """
    Tells downstream consumers of the read path that new articles exist.
    Without a webhook this only logs; webhook failures never fail the run.
    """

    def __init__(
        self,
        webhook_url: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._transport = transport

    async def revalidate(self, path: str = "/") -> bool:
        logger.info("Revalidating cached views", path=path)
        if not self.webhook_url:
            return False

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.webhook_url, json={"path": path})
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Revalidation webhook failed", path=path, error_type=type(e).__name__)
            return False

        return True
