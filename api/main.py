"""
FastAPI application for the notification pipeline.

This application provides:
1. The notification endpoint (/notify) running the full pipeline
2. Channel discovery (/channels)
3. Inspection endpoints for saved notifications and shared-logger output

Run with:
    uv run uvicorn api.main:app --reload

Then visit http://localhost:8000/docs for interactive API documentation.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException

from api.models import ChannelInfo, NotifyRequest, NotifyResponse
from notifications.channels import parse_channel
from notifications.exceptions import UnsupportedChannelError
from notifications.factory import ChannelFactory
from notifications.logger import SharedLogger
from notifications.store import NotificationStore, SavedNotification, get_store
from notifications.templates import ProcessingState

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger("notification_api")


# Application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info("Starting Notification Pipeline API")
    yield
    logger.info("Shutting down")


app = FastAPI(
    title="Notification Pipeline",
    description="""
    Pluggable notification pipeline: validate, prepare, send, log and save
    notifications over Email, SMS, Push and WhatsApp.

    ## Endpoints

    - `/notify` - Run one notification through the pipeline
    - `/channels` - Supported channels and whether they persist
    - `/notifications` - Notifications saved by the save strategies
    - `/logs` - Messages written through the shared logger
    """,
    version="1.0.0",
    lifespan=lifespan,
)

# Module-level instances (would use proper DI in production)
_factory: Optional[ChannelFactory] = None
_store: Optional[NotificationStore] = None


def get_notification_store() -> NotificationStore:
    """Get the notification store instance."""
    global _store
    if _store is None:
        _store = get_store()
    return _store


def get_factory(store: NotificationStore = Depends(get_notification_store)) -> ChannelFactory:
    """Get the channel factory instance."""
    global _factory
    if _factory is None:
        _factory = ChannelFactory(store=store)
    return _factory


def reset_api_state(
    factory: Optional[ChannelFactory] = None,
    store: Optional[NotificationStore] = None,
) -> None:
    """Reset API state (for testing)."""
    global _factory, _store
    _factory = factory
    _store = store


# =============================================================================
# Health Check
# =============================================================================

@app.get("/health", tags=["Health"])
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "notification-pipeline"}


# =============================================================================
# Notifications
# =============================================================================

@app.get("/channels", response_model=list[ChannelInfo], tags=["Notifications"])
def list_channels() -> list[ChannelInfo]:
    """List supported channels."""
    return [
        ChannelInfo(channel=channel, supports_save=ChannelFactory.supports_save(channel))
        for channel in ChannelFactory.supported_channels()
    ]


@app.post("/notify", response_model=NotifyResponse, tags=["Notifications"])
def send_notification(
    request: NotifyRequest,
    factory: ChannelFactory = Depends(get_factory),
) -> NotifyResponse:
    """
    Run one notification through the pipeline.

    If strategies_from is given, the notification is processed with that
    channel's strategies instead of its own (e.g. an SMS notification
    delivered through the email strategies).
    """
    logger.info(f"Notification request: channel={request.channel}, target={request.target}")

    try:
        notification = factory.create(request.channel, request.target)
        if request.strategies_from:
            notification.use_strategies(factory.create_strategies(request.strategies_from))
    except UnsupportedChannelError as e:
        raise HTTPException(status_code=400, detail=str(e))

    state = notification.process_notification()

    return NotifyResponse(
        channel=notification.channel,
        target=notification.target,
        state=state,
        content=notification.content,
        delivered=notification.send_strategy.find_message_to(notification.target) is not None,
        saved=ProcessingState.SAVING in notification.history,
        strategies_channel=notification.send_strategy.channel,
    )


@app.get("/notifications", response_model=list[SavedNotification], tags=["Notifications"])
def list_saved_notifications(
    channel: Optional[str] = None,
    store: NotificationStore = Depends(get_notification_store),
) -> list[SavedNotification]:
    """Get saved notifications, optionally for one channel."""
    if channel is None:
        return store.list_all()
    try:
        return store.list_by_channel(parse_channel(channel))
    except UnsupportedChannelError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/logs", tags=["Notifications"])
def get_logs(factory: ChannelFactory = Depends(get_factory)) -> dict[str, list[str]]:
    """Get messages written through the shared logger."""
    shared_logger = factory.shared_logger or SharedLogger.get_instance()
    return {"messages": list(shared_logger.messages)}

