"""
Tests for the work order log (MaintenanceStaff-gated, orders start not completed).
"""

import pytest
from asset_registry.buisness.core.errors import AssetNotFoundError, InvalidIndexError, UnauthorizedError
from asset_registry.buisness.work_orders.work_order_log import WorkOrderEntry


def test_create_work_order(work_orders, staff, asset_id):
    assert work_orders.create_work_order(asset_id, 'Replace hydraulic hose', staff) == 0
    assert work_orders.create_work_order(asset_id, 'Recalibrate scale', staff) == 1

    orders = work_orders.get_work_orders(asset_id)
    assert orders == [
        WorkOrderEntry(index=0, details='Replace hydraulic hose', is_completed=False),
        WorkOrderEntry(index=1, details='Recalibrate scale', is_completed=False),
    ]
    assert orders[0].to_dict() == {'index': 0, 'details': 'Replace hydraulic hose', 'is_completed': False}


def test_update_work_order_sets_details_and_completion(work_orders, staff, asset_id):
    work_orders.create_work_order(asset_id, 'Replace hydraulic hose', staff)

    work_orders.update_work_order(asset_id, 0, 'Hose replaced', True, staff)

    assert work_orders.get_work_orders(asset_id) == [
        WorkOrderEntry(index=0, details='Hose replaced', is_completed=True)
    ]


def test_update_details_and_status_separately(work_orders, staff, asset_id):
    work_orders.create_work_order(asset_id, 'Replace hose', staff)

    work_orders.update_work_order_status(asset_id, 0, True, staff)
    work_orders.update_work_order_details(asset_id, 0, 'Hose replaced, leak fixed', staff)

    entry = work_orders.get_record(asset_id, 0)
    assert entry.details == 'Hose replaced, leak fixed'
    assert entry.is_completed is True


def test_work_orders_require_maintenance_staff(work_orders, manager, staff, asset_id):
    """Asset managers are not maintenance staff"""
    with pytest.raises(UnauthorizedError, match='Caller is not maintenance staff'):
        work_orders.create_work_order(asset_id, 'Replace hose', manager)

    work_orders.create_work_order(asset_id, 'Replace hose', staff)
    with pytest.raises(UnauthorizedError):
        work_orders.update_work_order(asset_id, 0, 'Done', True, manager)
    with pytest.raises(UnauthorizedError):
        work_orders.update_work_order(asset_id, 0, 'Done', True, 'admin')

    assert work_orders.get_record(asset_id, 0).is_completed is False


def test_work_order_and_maintenance_logs_are_independent(work_orders, maintenance, manager, staff, asset_id):
    maintenance.schedule_maintenance(asset_id, 'Oil change', manager)
    assert work_orders.create_work_order(asset_id, 'Replace hose', staff) == 0
    assert maintenance.record_count(asset_id) == 1
    assert work_orders.record_count(asset_id) == 1


@pytest.mark.parametrize('unknown_id', [3, 2 ** 63])
def test_unknown_asset(work_orders, staff, unknown_id):
    with pytest.raises(AssetNotFoundError):
        work_orders.create_work_order(unknown_id, 'Replace hose', staff)
    with pytest.raises(AssetNotFoundError):
        work_orders.update_work_order(unknown_id, 0, 'Done', True, staff)
    with pytest.raises(AssetNotFoundError):
        work_orders.update_work_order_status(unknown_id, 0, True, staff)
    with pytest.raises(AssetNotFoundError):
        work_orders.get_work_orders(unknown_id)


def test_invalid_index(work_orders, staff, asset_id):
    work_orders.create_work_order(asset_id, 'Replace hose', staff)
    with pytest.raises(InvalidIndexError):
        work_orders.update_work_order(asset_id, 1, 'Done', True, staff)
    with pytest.raises(InvalidIndexError):
        work_orders.update_work_order(asset_id, -1, 'Done', True, staff)
    with pytest.raises(InvalidIndexError):
        work_orders.get_record(asset_id, 1)

    assert work_orders.get_work_orders(asset_id) == [
        WorkOrderEntry(index=0, details='Replace hose', is_completed=False)
    ], "Out of range updates leave the work orders unchanged"


def test_rejected_update_leaves_record_unchanged(work_orders, staff, asset_id):
    work_orders.create_work_order(asset_id, 'Replace hose', staff)
    with pytest.raises(UnauthorizedError):
        work_orders.update_work_order(asset_id, 0, 'Done', True, 'outsider')
    assert work_orders.get_record(asset_id, 0) == WorkOrderEntry(index=0, details='Replace hose', is_completed=False)
