from datetime import datetime, timezone
from typing import Dict, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...config import Settings, get_settings
from ...core.database import get_db, ping

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    try:
        ping(db)
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "database": "unhealthy",
                "error": "Database connectivity failed",
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        )

    return {
        "status": "healthy",
        "service": "EasyRead News API",
        "version": "1.0.0",
        "environment": settings.environment,
        "database": "healthy",
        "enrichment": "simulated" if not settings.llm_api_key else "live",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
