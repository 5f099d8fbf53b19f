"""Schema returned by the liveness probe."""

from datetime import datetime

from pydantic import BaseModel


class HealthRead(BaseModel):
    status: str
    service: str
    version: str
    timestamp: datetime


__all__ = ["HealthRead"]
