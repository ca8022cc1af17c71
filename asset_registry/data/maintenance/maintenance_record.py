from asset_registry.data.virtual_log_record import VirtualLogRecord
from asset_registry import db


class MaintenanceRecord(VirtualLogRecord):
    """Maintenance schedule entry for an asset"""
    __tablename__ = 'maintenance_records'
    __table_args__ = (
        db.UniqueConstraint('asset_id', 'position', name='uq_maintenance_record_asset_position'),
    )

    status_field = 'is_scheduled'

    is_scheduled = db.Column(db.Boolean, nullable=False, default=True)
