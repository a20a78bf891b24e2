"""
Runtime settings for the notification pipeline.

Settings are a plain pydantic model with sensible defaults. They can be
overridden from environment variables via PipelineSettings.from_env():

    NOTIFY_SMS_MIN_LENGTH   minimum SMS target length (default 10)
    NOTIFY_LOG_PREFIX       prefix written before each shared-logger message
    NOTIFY_LOG_FILE         append shared-logger output to this file instead
                            of standard output

Unset or blank variables keep the defaults.
"""

import os
from typing import Optional

from pydantic import BaseModel, Field

from notifications.channels import Channel


DEFAULT_CONTENTS: dict[Channel, str] = {
    Channel.EMAIL: "Welcome to our service! Thanks for subscribing.",
    Channel.SMS: "Your verification code is: 123456",
    Channel.PUSH: "You have a new message!",
    Channel.WHATSAPP: "Hello! This is a WhatsApp business message.",
}

ENV_VARIABLES = {
    "sms_min_length": "NOTIFY_SMS_MIN_LENGTH",
    "log_prefix": "NOTIFY_LOG_PREFIX",
    "log_file": "NOTIFY_LOG_FILE",
}


class PipelineSettings(BaseModel):
    """Settings shared by the factory, templates and shared logger."""
    sms_min_length: int = Field(
        default=10,
        ge=1,
        description="Minimum length of an SMS target (phone number)",
    )
    log_prefix: str = Field(
        default="This is from log - ",
        description="Prefix written before every shared-logger message",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Append shared-logger output here instead of stdout",
    )
    contents: dict[Channel, str] = Field(
        default_factory=lambda: dict(DEFAULT_CONTENTS),
        description="Message body per channel; may reference {target}",
    )

    @classmethod
    def from_env(cls) -> "PipelineSettings":
        """Build settings from NOTIFY_* environment variables."""
        overrides: dict = {}
        for field, name in ENV_VARIABLES.items():
            value = os.environ.get(name, "")
            if value.strip():
                overrides[field] = value
        return cls(**overrides)

    def content_for(self, channel: Channel) -> str:
        """Get the configured body for a channel."""
        return self.contents.get(channel, DEFAULT_CONTENTS[channel])


# Module-level singleton for convenience
_default_settings: Optional[PipelineSettings] = None


def get_settings() -> PipelineSettings:
    """Get the default settings, read from the environment on first use."""
    global _default_settings
    if _default_settings is None:
        _default_settings = PipelineSettings.from_env()
    return _default_settings


def reset_settings(settings: Optional[PipelineSettings] = None) -> Optional[PipelineSettings]:
    """Replace the default settings (useful for testing)."""
    global _default_settings
    _default_settings = settings
    return _default_settings
