"""
Send, Log and Save strategies for each notification channel.

A notification template delegates the channel-specific steps of its
pipeline to three independent strategies:
- SendStrategy: deliver the content to the target (simulated)
- LogStrategy: record that an action happened, via the shared logger
- SaveStrategy: persist the notification, if the channel supports it

Strategies are plain objects with no reference back to the template, so any
template can run with any channel's strategies.

Design decisions:
- All sends are logged for visibility and tracked for test assertions
- Save strategies advertise is_supported; the template checks the flag and
  never calls save() on an unsupported strategy
- Log strategies take an injected SharedLogger, falling back to the
  process-wide instance when none is given
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union

from notifications.channels import Channel, DeliveryRecord, parse_channel
from notifications.logger import SharedLogger
from notifications.store import NotificationStore, SavedNotification, get_store

logger = logging.getLogger("notifications")


# =============================================================================
# Contracts
# =============================================================================

class SendStrategy(ABC):
    """
    Delivers content to a target.

    Concrete strategies track what they sent so tests can inspect it.
    """

    channel: Channel

    def __init__(self):
        self.sent_messages: list[DeliveryRecord] = []

    @abstractmethod
    def send(self, target: str, content: str) -> None:
        """Deliver content to target."""

    def _record(self, target: str, content: str) -> DeliveryRecord:
        record = DeliveryRecord(channel=self.channel, target=target, content=content)
        self.sent_messages.append(record)
        return record

    def get_sent_count(self) -> int:
        """Get the number of messages sent (for testing)."""
        return len(self.sent_messages)

    def clear_history(self):
        """Clear sent message history (useful between tests)."""
        self.sent_messages.clear()

    def find_message_to(self, target: str) -> Optional[DeliveryRecord]:
        """Find a message sent to a specific target."""
        for msg in self.sent_messages:
            if msg.target == target:
                return msg
        return None


class LogStrategy(ABC):
    """Records that an action occurred for a target."""

    channel: Channel

    def __init__(self, shared_logger: Optional[SharedLogger] = None):
        self._shared_logger = shared_logger

    @property
    def shared_logger(self) -> SharedLogger:
        if self._shared_logger is None:
            return SharedLogger.get_instance()
        return self._shared_logger

    @abstractmethod
    def log(self, target: str, action: str) -> None:
        """Record an action for target."""


class SaveStrategy(ABC):
    """
    Persists a notification.

    Channels that do not persist report is_supported = False; their save()
    must never be invoked by the pipeline.
    """

    channel: Channel
    is_supported: bool = True

    @abstractmethod
    def save(self, target: str, data: str) -> None:
        """Persist data for target."""


# =============================================================================
# Email
# =============================================================================

class EmailSendStrategy(SendStrategy):
    """Mock email delivery."""

    channel = Channel.EMAIL

    def send(self, target: str, content: str) -> None:
        logger.info(f"[EMAIL] To: {target} | Body: {content}")
        self._record(target, content)


class EmailLogStrategy(LogStrategy):
    channel = Channel.EMAIL

    def log(self, target: str, action: str) -> None:
        self.shared_logger.log(f"Email {action} for {target}")


class StoreSaveStrategy(SaveStrategy):
    """Saves notifications into a NotificationStore."""

    def __init__(self, store: Optional[NotificationStore] = None):
        self._store = store
        self.saved: list[SavedNotification] = []

    @property
    def store(self) -> NotificationStore:
        if self._store is None:
            return get_store()
        return self._store

    def save(self, target: str, data: str) -> None:
        record = self.store.save(self.channel, target, data)
        self.saved.append(record)
        logger.info(f"[{self.channel.value.upper()} SAVED] To: {target} | Id: {record.id}")


class EmailSaveStrategy(StoreSaveStrategy):
    channel = Channel.EMAIL


# =============================================================================
# SMS
# =============================================================================

class SMSSendStrategy(SendStrategy):
    """
    Mock SMS delivery.

    SMS messages are typically shorter than emails.
    """

    channel = Channel.SMS

    # SMS typically have character limits
    MAX_LENGTH = 160

    def send(self, target: str, content: str) -> None:
        if len(content) > self.MAX_LENGTH:
            logger.warning(
                f"[SMS] Message length ({len(content)}) exceeds {self.MAX_LENGTH} chars, "
                "may be split into multiple messages"
            )
        logger.info(f"[SMS] To: {target} | Message: {content}")
        self._record(target, content)


class SMSLogStrategy(LogStrategy):
    channel = Channel.SMS

    def log(self, target: str, action: str) -> None:
        self.shared_logger.log(f"SMS {action} for {target}")


class SMSSaveStrategy(StoreSaveStrategy):
    channel = Channel.SMS


# =============================================================================
# Push
# =============================================================================

class PushSendStrategy(SendStrategy):
    """Mock push delivery to a device token."""

    channel = Channel.PUSH

    def send(self, target: str, content: str) -> None:
        logger.info(f"[PUSH] Token: {target} | Message: {content}")
        self._record(target, content)


class PushLogStrategy(LogStrategy):
    channel = Channel.PUSH

    def log(self, target: str, action: str) -> None:
        self.shared_logger.log(f"Push notification {action} for {target}")


class UnsupportedSaveStrategy(SaveStrategy):
    """Save strategy for channels that never persist."""

    is_supported = False

    def save(self, target: str, data: str) -> None:
        logger.debug(f"[{self.channel.value.upper()}] Save not supported, ignoring {target}")


class PushSaveStrategy(UnsupportedSaveStrategy):
    channel = Channel.PUSH


# =============================================================================
# WhatsApp
# =============================================================================

class WhatsAppSendStrategy(SendStrategy):
    """Mock WhatsApp business message delivery."""

    channel = Channel.WHATSAPP

    def send(self, target: str, content: str) -> None:
        logger.info(f"[WHATSAPP] To: {target} | Message: {content}")
        self._record(target, content)


class WhatsAppLogStrategy(LogStrategy):
    channel = Channel.WHATSAPP

    def log(self, target: str, action: str) -> None:
        self.shared_logger.log(f"WhatsApp {action} for {target}")


class WhatsAppSaveStrategy(UnsupportedSaveStrategy):
    channel = Channel.WHATSAPP


# =============================================================================
# Strategy sets
# =============================================================================

@dataclass
class StrategySet:
    """The three strategies a template runs with. save may be None."""
    send: SendStrategy
    log: LogStrategy
    save: Optional[SaveStrategy] = None

    @property
    def supports_save(self) -> bool:
        return self.save is not None and self.save.is_supported


STRATEGY_CLASSES: dict[Channel, tuple[type[SendStrategy], type[LogStrategy], type[SaveStrategy]]] = {
    Channel.EMAIL: (EmailSendStrategy, EmailLogStrategy, EmailSaveStrategy),
    Channel.SMS: (SMSSendStrategy, SMSLogStrategy, SMSSaveStrategy),
    Channel.PUSH: (PushSendStrategy, PushLogStrategy, PushSaveStrategy),
    Channel.WHATSAPP: (WhatsAppSendStrategy, WhatsAppLogStrategy, WhatsAppSaveStrategy),
}


def create_strategies(
    channel: Union[Channel, str],
    store: Optional[NotificationStore] = None,
    shared_logger: Optional[SharedLogger] = None,
) -> StrategySet:
    """
    Build the default strategy set for a channel.

    Args:
        channel: Channel or its string value
        store: Store for save strategies (defaults to the module store)
        shared_logger: Logger for log strategies (defaults to the singleton)

    Raises:
        UnsupportedChannelError: If channel is not recognized
    """
    channel = parse_channel(channel)
    send_cls, log_cls, save_cls = STRATEGY_CLASSES[channel]

    if save_cls.is_supported:
        save = save_cls(store=store)
    else:
        save = save_cls()

    return StrategySet(
        send=send_cls(),
        log=log_cls(shared_logger=shared_logger),
        save=save,
    )
