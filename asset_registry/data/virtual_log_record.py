from asset_registry.data.core.audited_base import AuditedBase
from asset_registry import db
from sqlalchemy.orm import declared_attr

class VirtualLogRecord(AuditedBase):
    """
    Abstract per-asset log record. Concrete logs add their own status column
    and name it through ``status_field``.

    ``position`` is the record's index within its asset's list: the number of
    records that asset had when this one was appended.
    """
    __abstract__ = True

    status_field = None

    @declared_attr
    def asset_id(cls):
        return db.Column(db.Integer, db.ForeignKey('assets.id'), nullable=False, index=True)

    position = db.Column(db.Integer, nullable=False)
    details = db.Column(db.Text, nullable=False, default='')

    @property
    def status(self) -> bool:
        return bool(getattr(self, self.status_field))

    @status.setter
    def status(self, value: bool):
        setattr(self, self.status_field, bool(value))

    def __repr__(self):
        return f'<{self.__class__.__name__} asset={self.asset_id} #{self.position}>'
