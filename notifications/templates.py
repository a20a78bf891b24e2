"""
Notification templates: the fixed processing pipeline.

NotificationTemplate implements the template method. Every notification runs
the same steps in the same order:

    validate -> prepare content -> send -> log -> [save] -> post-process

Channel subclasses customise the hooks (validate_input, post_process) and
supply the content (prepare_content). Sending, logging and saving are
delegated to injected strategies, which can be swapped between runs.

Design decisions:
- Validation failure is an expected outcome, not an error: the run stops in
  the ABORTED state and no strategy is called
- Saving is driven by the save strategy's is_supported flag, checked once
- Content is assigned only while preparing and is read-only afterwards
- A template may run with another channel's strategies; this is allowed and
  only logged
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from notifications.channels import Channel
from notifications.config import PipelineSettings, get_settings
from notifications.strategies import LogStrategy, SaveStrategy, SendStrategy, StrategySet

logger = logging.getLogger("notification_pipeline")


class ProcessingState(str, Enum):
    """States of a single process_notification() run."""
    CREATED = "created"
    VALIDATING = "validating"
    ABORTED = "aborted"
    PREPARING = "preparing"
    SENDING = "sending"
    LOGGING = "logging"
    SAVING = "saving"
    POST_PROCESSING = "post_processing"
    COMPLETED = "completed"


class NotificationTemplate(ABC):
    """
    Base class for channel notifications.

    Example:
        strategies = create_strategies(Channel.EMAIL)
        notification = EmailNotification.from_strategies("a@example.com", strategies)
        notification.process_notification()  # ProcessingState.COMPLETED
    """

    channel: Channel
    notification_type: str

    def __init__(
        self,
        target: str,
        send_strategy: SendStrategy,
        log_strategy: LogStrategy,
        save_strategy: Optional[SaveStrategy] = None,
        settings: Optional[PipelineSettings] = None,
    ):
        """
        Initialize the notification.

        Args:
            target: Recipient address (email, phone number, device token)
            send_strategy: Delivers the content
            log_strategy: Records that the notification was processed
            save_strategy: Persists the notification; None skips saving
            settings: Pipeline settings (defaults to the module settings)
        """
        self.target = target
        self.send_strategy = send_strategy
        self.log_strategy = log_strategy
        self.save_strategy = save_strategy
        self.settings = settings or get_settings()

        self._content: Optional[str] = None
        self.state = ProcessingState.CREATED
        self.history: list[ProcessingState] = [ProcessingState.CREATED]

    @classmethod
    def from_strategies(
        cls,
        target: str,
        strategies: StrategySet,
        settings: Optional[PipelineSettings] = None,
    ) -> "NotificationTemplate":
        """Build a notification from a StrategySet."""
        return cls(
            target,
            send_strategy=strategies.send,
            log_strategy=strategies.log,
            save_strategy=strategies.save,
            settings=settings,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(target={self.target!r}, state={self.state.value})"

    @property
    def content(self) -> Optional[str]:
        """The prepared content, None until the preparing step has run."""
        return self._content

    # =========================================================================
    # Template method
    # =========================================================================

    def process_notification(self) -> ProcessingState:
        """
        Run the pipeline once.

        Returns:
            The terminal state: COMPLETED, or ABORTED if validation failed
        """
        self._content = None
        self.state = ProcessingState.CREATED
        self.history = [ProcessingState.CREATED]

        logger.info(f"Processing {self.notification_type} notification for {self.target}")
        self._log_foreign_strategies()

        self._enter(ProcessingState.VALIDATING)
        if not self.validate_input():
            logger.warning(f"Validation failed for {self.notification_type} target {self.target!r}")
            return self._enter(ProcessingState.ABORTED)

        self._enter(ProcessingState.PREPARING)
        self._content = self.prepare_content()

        self._execute_send()
        self._execute_log()
        self._execute_save()

        self._enter(ProcessingState.POST_PROCESSING)
        self.post_process()

        logger.info(f"{self.notification_type} notification for {self.target} completed")
        return self._enter(ProcessingState.COMPLETED)

    def _enter(self, state: ProcessingState) -> ProcessingState:
        self.state = state
        self.history.append(state)
        return state

    def _execute_send(self) -> None:
        self._enter(ProcessingState.SENDING)
        self.send_strategy.send(self.target, self._content)

    def _execute_log(self) -> None:
        self._enter(ProcessingState.LOGGING)
        self.log_strategy.log(self.target, "processed")

    def _execute_save(self) -> None:
        if not self.strategies.supports_save:
            logger.info(f"Save not supported for {self.notification_type}, skipping")
            return
        self._enter(ProcessingState.SAVING)
        self.save_strategy.save(self.target, self._content)

    def _log_foreign_strategies(self) -> None:
        for strategy in (self.send_strategy, self.log_strategy, self.save_strategy):
            other = getattr(strategy, "channel", None)
            if other is not None and other != self.channel:
                logger.info(
                    f"{self.notification_type} notification running "
                    f"{type(strategy).__name__} from the {other.value} channel"
                )

    # =========================================================================
    # Steps for subclasses
    # =========================================================================

    def validate_input(self) -> bool:
        """Hook: default requires a non-blank target."""
        return bool(self.target and self.target.strip())

    @abstractmethod
    def prepare_content(self) -> str:
        """Produce the message body for this notification."""

    def post_process(self) -> None:
        """Hook: runs after a successful send/log/save."""
        logger.info(f"Notification metrics updated for {self.notification_type}")

    def render_content(self) -> str:
        """Render the configured content for this channel."""
        return self.settings.content_for(self.channel).replace("{target}", self.target)

    # =========================================================================
    # Strategy swapping
    # =========================================================================

    def set_send_strategy(self, strategy: SendStrategy) -> None:
        self.send_strategy = strategy

    def set_log_strategy(self, strategy: LogStrategy) -> None:
        self.log_strategy = strategy

    def set_save_strategy(self, strategy: Optional[SaveStrategy]) -> None:
        self.save_strategy = strategy

    @property
    def strategies(self) -> StrategySet:
        """The strategies the next run will use."""
        return StrategySet(send=self.send_strategy, log=self.log_strategy, save=self.save_strategy)

    def use_strategies(self, strategies: StrategySet) -> None:
        """Replace all three strategies at once."""
        self.send_strategy = strategies.send
        self.log_strategy = strategies.log
        self.save_strategy = strategies.save


# =============================================================================
# Channel notifications
# =============================================================================

class EmailNotification(NotificationTemplate):
    channel = Channel.EMAIL
    notification_type = "Email"

    def validate_input(self) -> bool:
        is_valid = super().validate_input() and "@" in self.target
        if not is_valid:
            logger.warning(f"Invalid email format: {self.target!r}")
        return is_valid

    def prepare_content(self) -> str:
        content = self.render_content()
        logger.info(f"Email content prepared for {self.target}")
        return content


class SMSNotification(NotificationTemplate):
    channel = Channel.SMS
    notification_type = "SMS"

    def validate_input(self) -> bool:
        is_valid = (
            super().validate_input()
            and len(self.target.strip()) >= self.settings.sms_min_length
        )
        if not is_valid:
            logger.warning(f"Invalid phone number: {self.target!r}")
        return is_valid

    def prepare_content(self) -> str:
        content = self.render_content()
        logger.info(f"SMS content prepared for {self.target}")
        return content


class PushNotification(NotificationTemplate):
    channel = Channel.PUSH
    notification_type = "Push"

    def prepare_content(self) -> str:
        content = self.render_content()
        logger.info(f"Push notification content prepared for {self.target}")
        return content


class WhatsAppNotification(NotificationTemplate):
    channel = Channel.WHATSAPP
    notification_type = "WhatsApp"

    def prepare_content(self) -> str:
        content = self.render_content()
        logger.info(f"WhatsApp content prepared for {self.target}")
        return content
