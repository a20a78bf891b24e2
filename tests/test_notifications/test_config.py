"""
Tests for pipeline settings and channel parsing.
"""

import pytest
from pydantic import ValidationError

from notifications.channels import Channel, DeliveryRecord, parse_channel
from notifications.config import (
    DEFAULT_CONTENTS,
    PipelineSettings,
    get_settings,
    reset_settings,
)
from notifications.exceptions import UnsupportedChannelError


class TestPipelineSettings:
    """Tests for PipelineSettings."""

    def test_defaults(self):
        """Test the default values."""
        settings = PipelineSettings()

        assert settings.sms_min_length == 10
        assert settings.log_prefix == "This is from log - "
        assert settings.log_file is None
        assert settings.contents == DEFAULT_CONTENTS

    def test_from_env(self, monkeypatch):
        """Test reading overrides from NOTIFY_* variables."""
        monkeypatch.setenv("NOTIFY_SMS_MIN_LENGTH", "7")
        monkeypatch.setenv("NOTIFY_LOG_PREFIX", "LOG: ")
        monkeypatch.setenv("NOTIFY_LOG_FILE", "/tmp/notify.log")

        settings = PipelineSettings.from_env()

        assert settings.sms_min_length == 7
        assert settings.log_prefix == "LOG: "
        assert settings.log_file == "/tmp/notify.log"

    def test_from_env_without_variables(self, monkeypatch):
        """Test that missing variables keep the defaults."""
        for name in ("NOTIFY_SMS_MIN_LENGTH", "NOTIFY_LOG_PREFIX", "NOTIFY_LOG_FILE"):
            monkeypatch.delenv(name, raising=False)

        assert PipelineSettings.from_env() == PipelineSettings()

    def test_from_env_ignores_blank_variables(self, monkeypatch):
        """Test that blank variables are treated as unset."""
        monkeypatch.setenv("NOTIFY_SMS_MIN_LENGTH", "")
        monkeypatch.setenv("NOTIFY_LOG_PREFIX", "  ")
        monkeypatch.setenv("NOTIFY_LOG_FILE", "")

        assert PipelineSettings.from_env() == PipelineSettings()

    def test_from_env_rejects_non_numeric_min_length(self, monkeypatch):
        """Test that a bad SMS minimum is reported by settings validation."""
        monkeypatch.setenv("NOTIFY_SMS_MIN_LENGTH", "ten")

        with pytest.raises(ValidationError):
            PipelineSettings.from_env()

    def test_min_length_must_be_positive(self):
        """Test validation of the SMS minimum."""
        with pytest.raises(ValidationError):
            PipelineSettings(sms_min_length=0)

    def test_content_for_falls_back_to_default(self):
        """Test that channels missing from contents use the default body."""
        settings = PipelineSettings(contents={Channel.EMAIL: "Custom"})

        assert settings.content_for(Channel.EMAIL) == "Custom"
        assert settings.content_for(Channel.SMS) == DEFAULT_CONTENTS[Channel.SMS]

    def test_get_settings_is_cached(self):
        """Test the module-level settings singleton."""
        custom = PipelineSettings(sms_min_length=3)
        reset_settings(custom)

        assert get_settings() is custom


class TestChannels:
    """Tests for Channel parsing and delivery records."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (Channel.PUSH, Channel.PUSH),
            ("whatsapp", Channel.WHATSAPP),
            ("SMS", Channel.SMS),
            ("  email ", Channel.EMAIL),
        ],
    )
    def test_parse_channel(self, value, expected):
        """Test resolving channels from enum members and names."""
        assert parse_channel(value) == expected

    def test_parse_unknown_channel(self):
        """Test that unknown names raise UnsupportedChannelError."""
        with pytest.raises(UnsupportedChannelError, match="Unknown channel"):
            parse_channel("telegram")

    def test_delivery_record_str(self):
        """Test string representation of a delivery record."""
        record = DeliveryRecord(channel=Channel.SMS, target="1234567890", content="Your code")

        assert str(record) == "SMS to 1234567890: Your code"
