"""
Maintenance Log
Per-asset maintenance schedule. Writers must hold the AssetManager role.
A new entry starts scheduled.
"""

from dataclasses import dataclass
from typing import ClassVar, List, Optional
from asset_registry.buisness.assets.asset_ledger import AssetLedger
from asset_registry.buisness.core.asset_event_log import AssetEventLog, LogEntry, LogProfile
from asset_registry.buisness.core.notifier import NotificationBus
from asset_registry.buisness.core.role_authority import RoleAuthority
from asset_registry.buisness.core.roles import Role
from asset_registry.data.maintenance.maintenance_record import MaintenanceRecord


@dataclass(frozen=True)
class MaintenanceEntry(LogEntry):
    status_field: ClassVar[str] = 'is_scheduled'

    index: int
    details: str
    is_scheduled: bool


MAINTENANCE_LOG_PROFILE = LogProfile(
    label='Maintenance',
    required_role=Role.ASSET_MANAGER,
    record_model=MaintenanceRecord,
    entry_type=MaintenanceEntry,
    default_status=True,
    created_event='MaintenanceScheduled',
    updated_event='MaintenanceUpdated',
    status_event='MaintenanceStatusUpdated',
)


class MaintenanceLog(AssetEventLog):

    def __init__(self, authority: RoleAuthority, ledger: AssetLedger, bus: Optional[NotificationBus] = None):
        super().__init__(MAINTENANCE_LOG_PROFILE, authority, ledger, bus)

    def schedule_maintenance(self, asset_id: int, details: str, caller: str) -> int:
        return self.append(asset_id, details, caller)

    def update_maintenance_details(self, asset_id: int, index: int, details: str, caller: str) -> None:
        self.update_details(asset_id, index, details, caller)

    def update_maintenance_status(self, asset_id: int, index: int, is_scheduled: bool, caller: str) -> None:
        self.update_status(asset_id, index, is_scheduled, caller)

    def get_maintenance_schedule(self, asset_id: int) -> List[MaintenanceEntry]:
        return self.get_records(asset_id)
