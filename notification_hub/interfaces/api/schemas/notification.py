"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    ValidationInfo,
    field_serializer,
    field_validator,
)
from pydantic.alias_generators import to_camel

from notification_hub.domain.entities import NotificationType

PositiveId = Annotated[StrictInt, Field(gt=0)]


class CamelModel(BaseModel):
    """Base model exposing camelCase names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NotificationCreate(CamelModel):
    """Payload used to send one notification to several users."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    title: str = Field(..., max_length=255)
    content: str
    type: NotificationType
    user_ids: list[PositiveId] = Field(
        ..., min_length=1, description="Recipients; one notification is stored per entry"
    )

    @field_validator("title", "content")
    @classmethod
    def _require_text(cls, value: str, info: ValidationInfo) -> str:
        if not value.strip():
            raise ValueError(
                f"{info.field_name.capitalize()} is required and must be a non-empty string"
            )
        return value


class NotificationIdsRequest(CamelModel):
    """Payload used to read-toggle or delete a batch of notifications."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    ids: list[PositiveId] = Field(..., min_length=1, description="Notification identifiers")

    def unique_ids(self) -> list[int]:
        """Return the list of identifiers without duplicates preserving order."""

        unique: list[int] = []
        seen: set[int] = set()
        for notification_id in self.ids:
            if notification_id in seen:
                continue
            seen.add(notification_id)
            unique.append(notification_id)
        return unique


class NotificationRead(CamelModel):
    """Representation of a notification delivered to the client."""

    id: int
    title: str
    content: str
    type: NotificationType
    is_read: bool
    user_id: int | None = None
    created_at: datetime

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str:
        return value.isoformat()


class UnreadCountRead(CamelModel):
    unread_count: int


class MessageResponse(BaseModel):
    message: str


__all__ = [
    "MessageResponse",
    "NotificationCreate",
    "NotificationIdsRequest",
    "NotificationRead",
    "UnreadCountRead",
]
