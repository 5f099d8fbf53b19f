"""Process wide logging setup."""

from __future__ import annotations

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from notification_hub.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class ServiceJsonFormatter(JsonFormatter):
    """JSON formatter that tags every record with the service name."""

    def __init__(self, *args, service_name: str, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record, record, message_dict) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["severity"] = record.levelname
        log_record.setdefault("service", self.service_name)


def configure_logging(settings: Settings) -> logging.Handler:
    """Send every log record to stdout using one shared handler.

    Returns the installed handler. Uvicorn loggers are routed through it so
    access and error logs share the same format.
    """

    handler = logging.StreamHandler(sys.stdout)
    if settings.log_json:
        handler.setFormatter(
            ServiceJsonFormatter(LOG_FORMAT, service_name=settings.service_name)
        )
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if getattr(existing, "_notification_hub", False):
            root_logger.removeHandler(existing)
    handler._notification_hub = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level)

    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = [handler]
        uvicorn_logger.propagate = False

    return handler


__all__ = ["configure_logging", "ServiceJsonFormatter"]
