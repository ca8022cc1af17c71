"""
Work Order Log
Per-asset work orders. Writers must hold the MaintenanceStaff role.
A new work order starts not completed.
"""

from dataclasses import dataclass
from typing import ClassVar, List, Optional
from asset_registry.buisness.assets.asset_ledger import AssetLedger
from asset_registry.buisness.core.asset_event_log import AssetEventLog, LogEntry, LogProfile
from asset_registry.buisness.core.notifier import NotificationBus
from asset_registry.buisness.core.role_authority import RoleAuthority
from asset_registry.buisness.core.roles import Role
from asset_registry.data.work_orders.work_order_record import WorkOrderRecord


@dataclass(frozen=True)
class WorkOrderEntry(LogEntry):
    status_field: ClassVar[str] = 'is_completed'

    index: int
    details: str
    is_completed: bool


WORK_ORDER_LOG_PROFILE = LogProfile(
    label='Work order',
    required_role=Role.MAINTENANCE_STAFF,
    record_model=WorkOrderRecord,
    entry_type=WorkOrderEntry,
    default_status=False,
    created_event='WorkOrderCreated',
    updated_event='WorkOrderUpdated',
    status_event='WorkOrderStatusUpdated',
)


class WorkOrderLog(AssetEventLog):

    def __init__(self, authority: RoleAuthority, ledger: AssetLedger, bus: Optional[NotificationBus] = None):
        super().__init__(WORK_ORDER_LOG_PROFILE, authority, ledger, bus)

    def create_work_order(self, asset_id: int, details: str, caller: str) -> int:
        return self.append(asset_id, details, caller)

    def update_work_order(self, asset_id: int, index: int, details: str, is_completed: bool, caller: str) -> None:
        """Overwrite details and completion of a work order in one call"""
        self.update_record(asset_id, index, details, is_completed, caller)

    def update_work_order_details(self, asset_id: int, index: int, details: str, caller: str) -> None:
        self.update_details(asset_id, index, details, caller)

    def update_work_order_status(self, asset_id: int, index: int, is_completed: bool, caller: str) -> None:
        self.update_status(asset_id, index, is_completed, caller)

    def get_work_orders(self, asset_id: int) -> List[WorkOrderEntry]:
        return self.get_records(asset_id)
