"""
Process-wide shared logger.

Every log strategy writes through one SharedLogger instance so that all
channels share a single sink (console or file). The instance is created
lazily on first use and is safe to request from many threads at once.

Design decisions:
- Double-checked locking: the fast path reads the instance without taking
  the lock; only the first callers contend for it
- Construction failures are not cached: if opening the log file fails, the
  first caller sees the error and the next call tries again
- The sink is injectable (anything with write(str)) so tests can capture
  output instead of writing to the real console
- Diagnostic output still goes through the logging module; the shared logger
  is the application's own log sink, not a replacement for it
"""

import logging
import sys
import threading
from typing import Optional, Protocol

from notifications.config import PipelineSettings, get_settings

logger = logging.getLogger("notifications.shared_logger")


class Sink(Protocol):
    """Anything the shared logger can write lines to."""

    def write(self, text: str) -> object:
        ...


class SharedLogger:
    """
    Thread-safe, lazily created singleton logger.

    Example:
        SharedLogger.get_instance().log("Email processed for a@example.com")
        # stdout: This is from log - Email processed for a@example.com

    Tests can build their own instance with a StringIO sink and inject it
    into log strategies instead of reaching for the singleton.
    """

    _instance: Optional["SharedLogger"] = None
    _lock = threading.Lock()

    def __init__(self, sink: Optional[Sink] = None, prefix: str = "This is from log - "):
        """
        Initialize a logger.

        Args:
            sink: Object with a write(str) method. None means the current
                  sys.stdout, resolved at write time.
            prefix: Text written before every message
        """
        self._sink = sink
        self._owns_sink = False
        self._write_lock = threading.Lock()
        self.prefix = prefix
        self.messages: list[str] = []
        logger.info("Shared logger created")

    @classmethod
    def get_instance(cls) -> "SharedLogger":
        """Get the process-wide logger, creating it on first call."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls._from_settings(get_settings())
        return cls._instance

    @classmethod
    def _from_settings(cls, settings: PipelineSettings) -> "SharedLogger":
        # OSError from open() propagates; _instance stays None
        if settings.log_file:
            sink = open(settings.log_file, "a", encoding="utf-8")
            instance = cls(sink=sink, prefix=settings.log_prefix)
            instance._owns_sink = True
            return instance
        return cls(prefix=settings.log_prefix)

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the process-wide instance (useful for testing)."""
        with cls._lock:
            if cls._instance is not None:
                cls._instance.close()
            cls._instance = None

    def log(self, message: str) -> None:
        """Write a message to the sink."""
        line = f"{self.prefix}{message}\n"
        with self._write_lock:
            self.messages.append(message)
            sink = self._sink if self._sink is not None else sys.stdout
            sink.write(line)
            if hasattr(sink, "flush"):
                sink.flush()
        logger.debug(f"[SHARED LOG] {message}")

    def set_sink(self, sink: Optional[Sink]) -> None:
        """Swap the sink. Passing None goes back to stdout."""
        with self._write_lock:
            if self._owns_sink:
                self._sink.close()
                self._owns_sink = False
            self._sink = sink

    def clear_messages(self) -> None:
        """Clear the in-memory message history."""
        with self._write_lock:
            self.messages.clear()

    def close(self) -> None:
        """Close the sink if this logger opened it."""
        with self._write_lock:
            if self._owns_sink:
                self._sink.close()
                self._owns_sink = False
                self._sink = None


def get_shared_logger() -> SharedLogger:
    """Get the process-wide shared logger."""
    return SharedLogger.get_instance()


def reset_shared_logger() -> None:
    """Reset the process-wide shared logger (useful for testing)."""
    SharedLogger.reset_instance()
