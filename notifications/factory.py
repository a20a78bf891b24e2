"""
Channel factory.

Builds a fully wired notification for a channel and target: the concrete
template class for the channel, pre-loaded with that channel's default
send/log/save strategies.

Design decisions:
- Templates are looked up in a dispatch table rather than an if/elif chain
- Unknown channels fail here, at construction time, with
  UnsupportedChannelError
- The factory owns the store, shared logger and settings it injects, so a
  test can build an isolated factory without touching module singletons
"""

import logging
from typing import Optional, Union

from notifications.channels import Channel, parse_channel
from notifications.config import PipelineSettings, get_settings
from notifications.logger import SharedLogger
from notifications.store import NotificationStore, get_store
from notifications.strategies import STRATEGY_CLASSES, StrategySet, create_strategies
from notifications.templates import (
    EmailNotification,
    NotificationTemplate,
    PushNotification,
    SMSNotification,
    WhatsAppNotification,
)

logger = logging.getLogger("notifications.factory")


TEMPLATE_CLASSES: dict[Channel, type[NotificationTemplate]] = {
    Channel.EMAIL: EmailNotification,
    Channel.SMS: SMSNotification,
    Channel.PUSH: PushNotification,
    Channel.WHATSAPP: WhatsAppNotification,
}


class ChannelFactory:
    """
    Creates notifications for any supported channel.

    Example:
        factory = ChannelFactory()
        notification = factory.create(Channel.SMS, "1234567890")
        notification.process_notification()
    """

    def __init__(
        self,
        store: Optional[NotificationStore] = None,
        shared_logger: Optional[SharedLogger] = None,
        settings: Optional[PipelineSettings] = None,
    ):
        """
        Initialize the factory.

        Args:
            store: Store for save strategies (defaults to the module store)
            shared_logger: Logger for log strategies (defaults to the singleton)
            settings: Pipeline settings (defaults to the module settings)
        """
        self.store = store or get_store()
        self.shared_logger = shared_logger
        self.settings = settings or get_settings()

    def create(self, channel: Union[Channel, str], target: str) -> NotificationTemplate:
        """
        Create a notification wired with the channel's default strategies.

        Args:
            channel: Channel or its string value
            target: Recipient address

        Raises:
            UnsupportedChannelError: If channel is not recognized
        """
        channel = parse_channel(channel)
        template_cls = TEMPLATE_CLASSES[channel]
        notification = template_cls.from_strategies(
            target,
            self.create_strategies(channel),
            settings=self.settings,
        )
        logger.debug(f"Created {notification!r}")
        return notification

    def create_strategies(self, channel: Union[Channel, str]) -> StrategySet:
        """Build a channel's default strategies with this factory's dependencies."""
        return create_strategies(
            channel,
            store=self.store,
            shared_logger=self.shared_logger,
        )

    @staticmethod
    def supported_channels() -> list[Channel]:
        return list(TEMPLATE_CLASSES)

    @staticmethod
    def supports_save(channel: Union[Channel, str]) -> bool:
        """Whether a channel's default save strategy persists notifications."""
        _, _, save_cls = STRATEGY_CLASSES[parse_channel(channel)]
        return save_cls.is_supported
