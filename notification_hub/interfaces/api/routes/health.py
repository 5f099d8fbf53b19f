"""Liveness probe."""

from fastapi import APIRouter

from notification_hub.config import get_settings
from notification_hub.interfaces.api.schemas import HealthRead
from notification_hub.utils import current_time

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthRead)
def health() -> HealthRead:
    settings = get_settings()
    return HealthRead(
        status="OK",
        service=settings.service_name,
        version=settings.service_version,
        timestamp=current_time(),
    )
