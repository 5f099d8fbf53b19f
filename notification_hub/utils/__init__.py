"""Utility helpers for reusable functionality."""

from .clock import (
    app_timezone,
    current_storage_time,
    current_time,
    to_app_time,
    to_storage_time,
)

__all__ = [
    "app_timezone",
    "current_storage_time",
    "current_time",
    "to_app_time",
    "to_storage_time",
]
