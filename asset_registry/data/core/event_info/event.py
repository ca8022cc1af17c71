from asset_registry import db
from datetime import datetime


class Event(db.Model):
    """
    Persisted notification. One row per successful mutation, written in the
    same transaction as the mutation it describes.
    """
    __tablename__ = 'events'

    id = db.Column(db.Integer, primary_key=True)
    event_type = db.Column(db.String(100), nullable=False, index=True)
    description = db.Column(db.Text, nullable=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)
    principal = db.Column(db.String(80), nullable=True)
    asset_id = db.Column(db.Integer, db.ForeignKey('assets.id'), nullable=True, index=True)
    payload = db.Column(db.JSON, nullable=True)

    def __repr__(self):
        return f'<Event {self.event_type}: {self.description}>'

    @classmethod
    def add_event(cls, event_type, description, principal=None, asset_id=None, payload=None, timestamp=None):
        """
        Create a new event in the current session

        Args:
            event_type (str): Notification name, e.g. "AssetRegistered"
            description (str): Human readable summary
            principal (str, optional): Principal that triggered the event
            asset_id (int, optional): Related asset ID
            payload (dict, optional): Changed fields
            timestamp (datetime, optional): Defaults to now

        Returns:
            int: The ID of the created event
        """
        event = cls(
            event_type=event_type,
            description=description,
            principal=principal,
            asset_id=asset_id,
            payload=payload,
            timestamp=timestamp or datetime.utcnow()
        )

        db.session.add(event)
        db.session.flush()  # Get the ID without committing
        return event.id

    def to_dict(self):
        return {
            'id': self.id,
            'event_type': self.event_type,
            'description': self.description,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
            'principal': self.principal,
            'asset_id': self.asset_id,
            'payload': self.payload or {},
        }
