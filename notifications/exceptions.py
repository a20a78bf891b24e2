"""
Errors raised by the notification pipeline.

Only programming/configuration mistakes are exceptions here. Expected
business outcomes are not:
- A target that fails validation ends the run in the ABORTED state
- A channel whose Save strategy is unsupported simply skips persistence
"""

from typing import Any


class NotificationError(Exception):
    """Base class for notification pipeline errors."""


class UnsupportedChannelError(NotificationError, ValueError):
    """
    Raised when a factory is asked for a channel it does not know.

    Subclasses ValueError so callers that already guard channel parsing
    with ``except ValueError`` keep working.
    """

    def __init__(self, channel: Any):
        self.channel = channel
        super().__init__(f"Unknown channel: {channel}")
