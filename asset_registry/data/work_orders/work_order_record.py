from asset_registry.data.virtual_log_record import VirtualLogRecord
from asset_registry import db


class WorkOrderRecord(VirtualLogRecord):
    """Work order raised against an asset by maintenance staff"""
    __tablename__ = 'work_order_records'
    __table_args__ = (
        db.UniqueConstraint('asset_id', 'position', name='uq_work_order_record_asset_position'),
    )

    status_field = 'is_completed'

    is_completed = db.Column(db.Boolean, nullable=False, default=False)
