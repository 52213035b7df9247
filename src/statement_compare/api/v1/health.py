from fastapi import APIRouter

from statement_compare.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Basic health check."""
    return {"status": "ok", "environment": settings.app_env}
