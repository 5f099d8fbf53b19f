from fastapi import FastAPI
from contextlib import asynccontextmanager

from notification_hub.config import get_settings
from notification_hub.infrastructure.database import initialize_database, engine
from notification_hub.interfaces.api.errors import register_exception_handlers
from notification_hub.interfaces.api.routes import register_routes
from notification_hub.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables at startup and release the pool on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the notification service application."""

    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.service_name,
        version=settings.service_version,
        lifespan=lifespan,
    )
    register_exception_handlers(app)
    register_routes(app)
    return app


app = create_app()
