"""
API models for the notification service.

These Pydantic models define the contract between HTTP callers and the
notification pipeline.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from notifications.channels import Channel
from notifications.templates import ProcessingState


class NotifyRequest(BaseModel):
    """
    Request to process one notification.

    channel is a plain string so that unknown channels reach the factory and
    are reported as 400 rather than a schema error.
    """
    channel: str = Field(..., description="Channel to notify on (email, sms, push, whatsapp)")
    target: str = Field(..., description="Recipient address: email, phone number or device token")
    strategies_from: Optional[str] = Field(
        default=None,
        description="Run with another channel's send/log/save strategies instead of the default ones",
    )


class NotifyResponse(BaseModel):
    """
    Outcome of a pipeline run.

    A target that fails validation is not an error: state is "aborted" and
    nothing is delivered or saved.
    """
    channel: Channel
    target: str
    state: ProcessingState
    content: Optional[str] = None
    delivered: bool
    saved: bool
    strategies_channel: Channel
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ChannelInfo(BaseModel):
    """A supported channel and whether it persists notifications."""
    channel: Channel
    supports_save: bool
