from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure.database import engine, initialize_database
from app.infrastructure.notifications import (
    create_notification_publisher,
    shutdown_notification_publisher,
    start_notification_publisher,
)
from app.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare storage and the notification publisher; tear both down on exit."""

    initialize_database()
    publisher = create_notification_publisher()
    detach_relay = start_notification_publisher(publisher)
    app.state.notification_publisher = publisher
    logger.info("Notification API ready (capacity %s)", publisher.capacity)
    try:
        yield
    finally:
        shutdown_notification_publisher(publisher, detach_relay)
        app.state.notification_publisher = None
        engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the main FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="SAKHI Notifications", lifespan=lifespan)

    # Allow the dashboard frontend to call the API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
