"""
In-memory notification store.

Stands in for the database that save strategies persist notifications to.
Nothing is written to disk; a process restart starts from an empty store.

Design decisions:
- Records are pydantic models so the API can return them directly
- Keyed by a generated id, insertion order preserved for listing
- A lock guards mutations so concurrent pipelines can share one store
"""

import threading
from datetime import datetime
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from notifications.channels import Channel


class SavedNotification(BaseModel):
    """A notification persisted by a save strategy."""
    id: str = Field(default_factory=lambda: str(uuid4()), description="Record identifier")
    channel: Channel = Field(..., description="Channel that saved the record")
    target: str = Field(..., description="Recipient address")
    data: str = Field(..., description="Saved payload (the prepared content)")
    saved_at: datetime = Field(default_factory=datetime.utcnow)


class NotificationStore:
    """
    Dictionary-backed store for saved notifications.

    Example:
        store = NotificationStore()
        record = store.save(Channel.EMAIL, "a@example.com", "Welcome!")
        store.get(record.id)
    """

    def __init__(self):
        self._records: dict[str, SavedNotification] = {}
        self._lock = threading.Lock()

    def save(self, channel: Channel, target: str, data: str) -> SavedNotification:
        """Persist a notification and return the stored record."""
        record = SavedNotification(channel=channel, target=target, data=data)
        with self._lock:
            self._records[record.id] = record
        return record

    def get(self, record_id: str) -> Optional[SavedNotification]:
        """Get a record by id."""
        return self._records.get(record_id)

    def list_all(self) -> list[SavedNotification]:
        """Get all records in insertion order."""
        with self._lock:
            return list(self._records.values())

    def list_by_channel(self, channel: Channel) -> list[SavedNotification]:
        """Get all records saved by one channel."""
        return [r for r in self.list_all() if r.channel == channel]

    def count(self) -> int:
        return len(self._records)

    def clear(self) -> None:
        """Remove every record (useful between tests)."""
        with self._lock:
            self._records.clear()


# Module-level singleton for convenience
# In tests, create a new NotificationStore instance instead
_default_store: Optional[NotificationStore] = None


def get_store() -> NotificationStore:
    """Get the default notification store singleton."""
    global _default_store
    if _default_store is None:
        _default_store = NotificationStore()
    return _default_store
