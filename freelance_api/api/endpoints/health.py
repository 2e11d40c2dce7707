from fastapi import APIRouter
from typing import Any

from freelance_api.core.config import settings

router = APIRouter()


@router.get("", response_model=dict[str, Any])
def health_check() -> Any:
    """
    Health check endpoint. Reports which optional integrations are configured,
    never their values.
    """
    return {
        "status": "ok",
        "environment": settings.ENVIRONMENT,
        "database": "configured" if settings.DATABASE_URL or settings.DB_HOST else "sqlite",
        "email": "configured" if settings.smtp_configured else "not configured",
    }
