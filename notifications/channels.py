"""
Notification channels and delivery records.

A channel is one of the supported delivery mechanisms. Delivery itself is
simulated: send strategies log the message and keep a DeliveryRecord so tests
can assert on what was "sent". In a real system these would integrate with
services like:
- Email: SendGrid, AWS SES, Mailgun
- SMS / WhatsApp: Twilio, AWS SNS, Vonage
- Push: Firebase Cloud Messaging, APNs
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Union

from notifications.exceptions import UnsupportedChannelError


class Channel(str, Enum):
    """Supported notification channels."""
    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"
    WHATSAPP = "whatsapp"


def parse_channel(value: Union[Channel, str]) -> Channel:
    """
    Resolve a Channel from an enum member or its (case-insensitive) value.

    Raises:
        UnsupportedChannelError: If the value names no known channel
    """
    if isinstance(value, Channel):
        return value
    try:
        return Channel(str(value).strip().lower())
    except ValueError:
        raise UnsupportedChannelError(value) from None


@dataclass
class DeliveryRecord:
    """
    One simulated send.

    Captured by send strategies for debugging and test assertions.
    """
    channel: Channel
    target: str
    content: str
    timestamp: datetime = field(default_factory=datetime.utcnow)

    def __str__(self) -> str:
        return f"{self.channel.value.upper()} to {self.target}: {self.content[:50]}"
