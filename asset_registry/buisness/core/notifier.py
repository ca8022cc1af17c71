"""
Notifications for external observers (dashboards, indexers)

A Notification is built for every successful mutation. It is persisted as an
Event row inside the mutation's transaction and handed to subscribers once
the transaction has committed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
import threading
from asset_registry.logger import get_logger

logger = get_logger("asset_registry.buisness.core.notifier")


@dataclass(frozen=True)
class Notification:
    operation: str
    asset_id: Optional[int]
    fields: Dict[str, Any] = field(default_factory=dict)
    principal: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'operation': self.operation,
            'asset_id': self.asset_id,
            'fields': dict(self.fields),
            'principal': self.principal,
            'timestamp': self.timestamp.isoformat(),
        }


class NotificationBus:
    """
    In-process fan-out of committed notifications.

    Subscribers are plain callables taking a Notification. A subscriber that
    raises is logged and skipped; the mutation it observes is already committed.
    """

    def __init__(self):
        self._subscribers: List[Callable[[Notification], None]] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Callable[[Notification], None]) -> Callable[[], None]:
        """
        Register a subscriber.

        Returns:
            A callable that removes the subscriber again
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, notification: Notification) -> None:
        logger.info(f"{notification.operation} (asset {notification.asset_id})",
                    extra={'notification': notification.to_dict()})
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(notification)
            except Exception:
                logger.exception(f"Notification subscriber failed for {notification.operation}")
