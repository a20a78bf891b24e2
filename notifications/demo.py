"""
Demonstration scripts for the notification pipeline.

These functions show the pipeline in action. Run them to see each channel
validated, sent, logged and (where supported) saved.
"""

import logging
import threading

from notifications.channels import Channel
from notifications.factory import ChannelFactory
from notifications.logger import SharedLogger
from notifications.store import NotificationStore
from notifications.templates import NotificationTemplate

# Configure logging to see what's happening
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
    datefmt="%H:%M:%S",
)


DEMO_TARGETS: dict[Channel, str] = {
    Channel.EMAIL: "john@example.com",
    Channel.SMS: "1234567890",
    Channel.PUSH: "token_abc123",
    Channel.WHATSAPP: "0987654321",
}


def run_all_channels_demo() -> list[NotificationTemplate]:
    """
    Process one notification on every channel.

    This shows:
    1. The factory wires each channel with its own strategies
    2. Every notification follows the same pipeline
    3. Email and SMS are saved; Push and WhatsApp skip the save step
    """
    print("\n" + "=" * 70)
    print("DEMO: One notification per channel")
    print("=" * 70 + "\n")

    store = NotificationStore()
    factory = ChannelFactory(store=store)

    notifications = []
    for channel, target in DEMO_TARGETS.items():
        print("-" * 70)
        notification = factory.create(channel, target)
        state = notification.process_notification()
        print(f"{notification.notification_type}: {state.value}")
        notifications.append(notification)

    print("\n" + "-" * 70)
    print(f"Saved notifications: {store.count()}")
    for record in store.list_all():
        print(f"  {record.channel.value}: {record.target} - {record.data}")

    return notifications


def run_hybrid_demo() -> NotificationTemplate:
    """
    Run an SMS notification with the Email strategies.

    Strategies know nothing about the template they run in, so the SMS
    pipeline (SMS validation and content) delivers, logs and saves through
    the email strategies.
    """
    print("\n" + "=" * 70)
    print("DEMO: SMS notification using EMAIL strategies")
    print("=" * 70 + "\n")

    factory = ChannelFactory(store=NotificationStore())
    notification = factory.create(Channel.SMS, "5555555555")
    notification.use_strategies(factory.create_strategies(Channel.EMAIL))

    state = notification.process_notification()
    print(f"\nResult: {state.value}")
    for msg in notification.send_strategy.sent_messages:
        print(f"  {msg}")

    return notification


def run_singleton_demo(thread_count: int = 3) -> set[int]:
    """
    Race several threads to get the shared logger.

    All threads must receive the same instance; "Shared logger created" is
    logged exactly once.
    """
    print("\n" + "=" * 70)
    print(f"DEMO: {thread_count} threads requesting the shared logger")
    print("=" * 70 + "\n")

    ids: set[int] = set()
    ids_lock = threading.Lock()

    def worker():
        instance = SharedLogger.get_instance()
        with ids_lock:
            ids.add(id(instance))

    threads = [threading.Thread(target=worker) for _ in range(thread_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    print(f"Distinct instances: {len(ids)}")
    return ids


def run_rejected_demo() -> list[NotificationTemplate]:
    """Show validation short-circuiting the pipeline."""
    print("\n" + "=" * 70)
    print("DEMO: Invalid targets are rejected before sending")
    print("=" * 70 + "\n")

    factory = ChannelFactory(store=NotificationStore())
    rejected = [
        factory.create(Channel.EMAIL, "not-an-email"),
        factory.create(Channel.SMS, "12345"),
    ]
    for notification in rejected:
        state = notification.process_notification()
        sent = notification.send_strategy.get_sent_count()
        print(f"{notification!r}: {state.value}, sent={sent}")
    return rejected
