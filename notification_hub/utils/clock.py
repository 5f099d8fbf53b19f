"""Clock used to stamp notifications and read their creation time back."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from functools import lru_cache

import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from notification_hub.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def app_timezone() -> tzinfo:
    """Return the zone named by ``APP_TIMEZONE``; unknown names mean UTC."""

    name = get_settings().app_timezone.strip() or "UTC"
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown APP_TIMEZONE %r, falling back to UTC", name)
        return timezone.utc


def current_time() -> datetime:
    return datetime.now(tz=app_timezone())


def to_app_time(value: datetime | None) -> datetime | None:
    """Express ``value`` in the application zone.

    Naive values are what the database hands back and are already in that
    zone, so the zone is only attached.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=app_timezone())
    return value.astimezone(app_timezone())


def to_storage_time(value: datetime) -> datetime:
    # DATETIME columns keep no offset.
    return to_app_time(value).replace(tzinfo=None)


def current_storage_time() -> datetime:
    return to_storage_time(current_time())
