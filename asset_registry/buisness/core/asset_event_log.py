"""
Asset Event Log
Generic role-gated, append-only, index-addressed log of records per asset.

One engine serves every concrete log. A LogProfile names what differs between
them: the role a writer must hold, the record model (and so its status
column and default), and the notification names.

Records are never removed or reordered. A record's index is its position in
its asset's list and equals the list length at the time it was appended.
"""

from dataclasses import dataclass, asdict
from typing import Any, ClassVar, Dict, List, Optional, Type
from sqlalchemy import func
from asset_registry import db
from asset_registry.buisness.assets.asset_ledger import AssetLedger
from asset_registry.buisness.core.errors import AssetNotFoundError, InvalidIndexError
from asset_registry.buisness.core.narrator import LedgerNarrator
from asset_registry.buisness.core.notifier import NotificationBus
from asset_registry.buisness.core.role_authority import RoleAuthority
from asset_registry.buisness.core.roles import Role
from asset_registry.buisness.core.transaction import atomic
from asset_registry.data.virtual_log_record import VirtualLogRecord
from asset_registry.logger import get_logger

logger = get_logger("asset_registry.buisness.core.asset_event_log")


class LogEntry:
    """
    Base for the read-only record snapshots returned by a log.
    Concrete entries are frozen dataclasses with fields
    ``index``, ``details`` and the log's status field.
    """

    status_field: ClassVar[str] = None

    @classmethod
    def from_record(cls, record: VirtualLogRecord) -> 'LogEntry':
        return cls(index=record.position, details=record.details,
                   **{cls.status_field: bool(getattr(record, cls.status_field))})

    @property
    def status(self) -> bool:
        return getattr(self, self.status_field)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LogProfile:
    """What distinguishes one concrete log from another"""

    label: str
    required_role: Role
    record_model: Type[VirtualLogRecord]
    entry_type: Type[LogEntry]
    default_status: bool
    created_event: str
    updated_event: str
    status_event: str

    @property
    def status_field(self) -> str:
        return self.record_model.status_field


class AssetEventLog:
    """
    Engine behind MaintenanceLog and WorkOrderLog.

    Every write checks, in order: the caller's role, the asset's existence
    (through the ledger), then the index bound.
    """

    def __init__(self, profile: LogProfile, authority: RoleAuthority, ledger: AssetLedger,
                 bus: Optional[NotificationBus] = None):
        self.profile = profile
        self._authority = authority
        self._ledger = ledger
        self._bus = bus

    def append(self, asset_id: int, details: str, caller: str) -> int:
        """
        Append a record with the log's default status.

        Returns:
            Index of the new record

        Raises:
            UnauthorizedError: If caller lacks the log's role
            AssetNotFoundError: If asset_id was never registered
        """
        profile = self.profile
        with atomic(profile.created_event, caller, self._bus) as txn:
            self._check_writable(asset_id, caller)

            index = self._length(asset_id)
            record = profile.record_model(
                asset_id=asset_id,
                position=index,
                details=details,
                created_by=caller,
                updated_by=caller,
            )
            record.status = profile.default_status
            db.session.add(record)
            db.session.flush()

            txn.notify(profile.created_event, asset_id, {
                'index': index,
                'details': details,
                profile.status_field: profile.default_status,
            }, LedgerNarrator.log_record_appended(profile.label, asset_id, index))

        return index

    def update_details(self, asset_id: int, index: int, new_details: str, caller: str) -> None:
        """
        Overwrite the details of the record at index.

        Raises:
            UnauthorizedError, AssetNotFoundError, InvalidIndexError
        """
        self._update(self.profile.updated_event, asset_id, index, caller, details=new_details)

    def update_status(self, asset_id: int, index: int, new_status: bool, caller: str) -> None:
        """
        Overwrite the status flag of the record at index.

        Raises:
            UnauthorizedError, AssetNotFoundError, InvalidIndexError
        """
        self._update(self.profile.status_event, asset_id, index, caller, status=new_status)

    def update_record(self, asset_id: int, index: int, new_details: str, new_status: bool, caller: str) -> None:
        """
        Overwrite details and status of the record at index in one call.

        Raises:
            UnauthorizedError, AssetNotFoundError, InvalidIndexError
        """
        self._update(self.profile.updated_event, asset_id, index, caller,
                     details=new_details, status=new_status)

    def get_records(self, asset_id: int) -> List[LogEntry]:
        """
        Get the asset's records in index order. Unrestricted.

        Raises:
            AssetNotFoundError: If asset_id was never registered
        """
        if not self._ledger.asset_exists(asset_id):
            raise AssetNotFoundError(asset_id)
        model = self.profile.record_model
        records = model.query.filter_by(asset_id=asset_id).order_by(model.position.asc()).all()
        return [self.profile.entry_type.from_record(r) for r in records]

    def get_record(self, asset_id: int, index: int) -> LogEntry:
        """
        Raises:
            AssetNotFoundError, InvalidIndexError
        """
        if not self._ledger.asset_exists(asset_id):
            raise AssetNotFoundError(asset_id)
        return self.profile.entry_type.from_record(self._get_record(asset_id, index))

    def record_count(self, asset_id: int) -> int:
        if not self._ledger.asset_exists(asset_id):
            raise AssetNotFoundError(asset_id)
        return self._length(asset_id)

    def _update(self, event_type: str, asset_id: int, index: int, caller: str,
                details: Optional[str] = None, status: Optional[bool] = None) -> None:
        profile = self.profile
        with atomic(event_type, caller, self._bus) as txn:
            self._check_writable(asset_id, caller)
            record = self._get_record(asset_id, index)

            fields: Dict[str, Any] = {'index': index}
            if details is not None:
                record.details = details
                fields['details'] = details
            if status is not None:
                record.status = status
                fields[profile.status_field] = bool(status)
            record.updated_by = caller

            changed = [name for name in fields if name != 'index']
            txn.notify(event_type, asset_id, fields,
                       LedgerNarrator.log_record_updated(profile.label, asset_id, index, changed))

    def _check_writable(self, asset_id: int, caller: str) -> None:
        self._authority.require_role(self.profile.required_role, caller)
        if not self._ledger.asset_exists(asset_id):
            raise AssetNotFoundError(asset_id)

    def _length(self, asset_id: int) -> int:
        model = self.profile.record_model
        return db.session.query(func.count(model.id)).filter(model.asset_id == asset_id).scalar() or 0

    def _get_record(self, asset_id: int, index: int) -> VirtualLogRecord:
        length = self._length(asset_id)
        if not isinstance(index, int) or isinstance(index, bool) or index < 0 or index >= length:
            raise InvalidIndexError(index, length)
        model = self.profile.record_model
        return model.query.filter_by(asset_id=asset_id, position=index).one()
