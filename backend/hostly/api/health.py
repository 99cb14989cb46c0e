# backend/hostly/api/health.py
from fastapi import APIRouter, Depends

from hostly.api.deps import get_settings
from hostly.api.schemas import HealthResponse
from hostly.core.config import Settings

router = APIRouter(tags=["Health"])


@router.get("/", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        message=settings.APP_NAME,
        version=settings.APP_VERSION,
    )
