"""
Pluggable notification pipeline.

This package contains:
- Channels (Email, SMS, Push, WhatsApp) and delivery records
- Send/Log/Save strategies for each channel
- The notification template that runs the fixed processing pipeline
- A factory that wires templates with their default strategies
- A process-wide shared logger and an in-memory notification store
"""

from notifications.channels import Channel, DeliveryRecord, parse_channel
from notifications.config import PipelineSettings, get_settings
from notifications.exceptions import NotificationError, UnsupportedChannelError
from notifications.factory import ChannelFactory
from notifications.logger import SharedLogger, get_shared_logger, reset_shared_logger
from notifications.store import NotificationStore, SavedNotification, get_store
from notifications.strategies import StrategySet, create_strategies
from notifications.templates import (
    EmailNotification,
    NotificationTemplate,
    ProcessingState,
    PushNotification,
    SMSNotification,
    WhatsAppNotification,
)

__all__ = [
    "Channel",
    "DeliveryRecord",
    "parse_channel",
    "PipelineSettings",
    "get_settings",
    "NotificationError",
    "UnsupportedChannelError",
    "ChannelFactory",
    "SharedLogger",
    "get_shared_logger",
    "reset_shared_logger",
    "NotificationStore",
    "SavedNotification",
    "get_store",
    "StrategySet",
    "create_strategies",
    "EmailNotification",
    "NotificationTemplate",
    "ProcessingState",
    "PushNotification",
    "SMSNotification",
    "WhatsAppNotification",
]
