"""
Virtual Sequence Generator Base Class
Provides counter-table sequences that take part in the caller's transaction
"""

from asset_registry import db
from sqlalchemy import text
import threading
from abc import ABC, abstractmethod


class VirtualSequenceGenerator(ABC):
    """
    Abstract base class for sequence generators.

    The counter row is updated inside the current session, so a rolled back
    transaction also rolls back the id it drew.
    """

    _lock = threading.Lock()

    # First value handed out by get_next_id()
    start_value = 1

    @classmethod
    @abstractmethod
    def get_sequence_table_name(cls):
        """
        Return the table name for the sequence counter
        Must be implemented by subclasses
        """
        pass

    @classmethod
    def get_next_id(cls):
        """
        Advance the sequence and return the new value
        """
        with cls._lock:
            db.session.execute(text(f"UPDATE {cls.get_sequence_table_name()} SET current_value = current_value + 1"))
            result = db.session.execute(text(f"SELECT current_value FROM {cls.get_sequence_table_name()}"))
            return result.scalar()

    @classmethod
    def create_sequence_if_not_exists(cls):
        """
        Create the counter table and seed it one below start_value
        """
        try:
            db.session.execute(text(f"""
                CREATE TABLE IF NOT EXISTS {cls.get_sequence_table_name()} (
                    id INTEGER PRIMARY KEY,
                    current_value INTEGER DEFAULT 0
                )
            """))

            result = db.session.execute(text(f"SELECT COUNT(*) FROM {cls.get_sequence_table_name()}"))
            if result.scalar() == 0:
                db.session.execute(
                    text(f"INSERT INTO {cls.get_sequence_table_name()} (current_value) VALUES (:value)"),
                    {'value': cls.start_value - 1}
                )

            db.session.commit()

        except Exception:
            db.session.rollback()
            raise

    @classmethod
    def reset_sequence(cls, start_value=None):
        """
        Reset the sequence so the next id is start_value
        Useful for testing or data migration
        """
        if start_value is None:
            start_value = cls.start_value
        with cls._lock:
            db.session.execute(
                text(f"UPDATE {cls.get_sequence_table_name()} SET current_value = :value"),
                {'value': start_value - 1}
            )
            db.session.commit()

    @classmethod
    def get_current_sequence_value(cls):
        """
        Get the last value handed out (start_value - 1 when none has been)
        """
        result = db.session.execute(text(f"SELECT current_value FROM {cls.get_sequence_table_name()}"))
        return result.scalar()
