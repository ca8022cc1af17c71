"""
Atomic write scope shared by every mutating operation

All mutations run under one process-wide re-entrant lock, so the
"check role, check existence, mutate" sequence of a call is never
interleaved with another writer. The session is committed when the scope
exits normally and rolled back on any exception, which is re-raised.
"""

from contextlib import contextmanager
from typing import Any, Dict, List, Optional
import threading
from asset_registry import db
from asset_registry.buisness.core.errors import LedgerDomainError
from asset_registry.buisness.core.notifier import Notification, NotificationBus
from asset_registry.data.core.event_info.event import Event
from asset_registry.logger import get_logger

logger = get_logger("asset_registry.buisness.core.transaction")

_write_lock = threading.RLock()


class LedgerTransaction:
    """Collects the notifications produced inside one atomic scope"""

    def __init__(self, operation: str, principal: Optional[str]):
        self.operation = operation
        self.principal = principal
        self.notifications: List[Notification] = []

    def notify(self, event_type: str, asset_id: Optional[int], fields: Dict[str, Any], description: str) -> Notification:
        """
        Record a notification. The Event row joins the current transaction;
        delivery to subscribers waits for the commit.
        """
        notification = Notification(
            operation=event_type,
            asset_id=asset_id,
            fields=dict(fields),
            principal=self.principal,
        )
        Event.add_event(
            event_type=event_type,
            description=description,
            principal=self.principal,
            asset_id=asset_id,
            payload=dict(fields),
            timestamp=notification.timestamp,
        )
        self.notifications.append(notification)
        return notification


@contextmanager
def atomic(operation: str, principal: Optional[str] = None, bus: Optional[NotificationBus] = None):
    """
    Run a mutation atomically.

    Args:
        operation: Operation name, used for logging
        principal: Calling principal, recorded on emitted events
        bus: Receives the scope's notifications after commit

    Yields:
        LedgerTransaction
    """
    with _write_lock:
        txn = LedgerTransaction(operation, principal)
        try:
            yield txn
            db.session.commit()
        except LedgerDomainError as e:
            db.session.rollback()
            logger.warning(f"{operation} rejected for {principal}: {e.kind} - {e.message}")
            raise
        except Exception:
            db.session.rollback()
            logger.exception(f"{operation} failed for {principal}, transaction rolled back")
            raise

    if bus is not None:
        for notification in txn.notifications:
            bus.publish(notification)
