"""
Tests for notifications: one per successful mutation, none for rejected ones,
persisted as Event rows and handed to bus subscribers after commit.
"""

import json
import logging
import pytest
from asset_registry.buisness.core.errors import UnauthorizedError
from asset_registry.buisness.core.notifier import Notification, NotificationBus
from asset_registry.data.core.event_info.event import Event
from asset_registry.logger import JsonFormatter


def test_asset_lifecycle_notifications(ledger, manager, notifications):
    asset_id = ledger.register_asset('alice', 'Forklift', 'Inspection', manager)
    ledger.set_transfer_condition(asset_id, 'Board approval', manager)
    ledger.transfer_ownership(asset_id, 'bob', manager)
    ledger.accept_ownership(asset_id, manager)

    assert [n.operation for n in notifications] == [
        'AssetRegistered',
        'TransferConditionUpdated',
        'OwnershipTransferProposed',
        'OwnershipTransferred',
    ]
    assert all(n.asset_id == asset_id for n in notifications)
    assert all(n.principal == manager for n in notifications)
    assert notifications[0].fields == {'owner': 'alice', 'details': 'Forklift', 'transfer_condition': 'Inspection'}
    assert notifications[3].fields == {'previous_owner': 'alice', 'owner': 'bob'}


def test_log_notifications(maintenance, work_orders, manager, staff, asset_id, notifications):
    maintenance.schedule_maintenance(asset_id, 'Oil change', manager)
    maintenance.update_maintenance_details(asset_id, 0, 'Oil and filter', manager)
    maintenance.update_maintenance_status(asset_id, 0, False, manager)
    work_orders.create_work_order(asset_id, 'Replace hose', staff)
    work_orders.update_work_order(asset_id, 0, 'Hose replaced', True, staff)

    assert [n.operation for n in notifications] == [
        'MaintenanceScheduled',
        'MaintenanceUpdated',
        'MaintenanceStatusUpdated',
        'WorkOrderCreated',
        'WorkOrderUpdated',
    ]
    assert notifications[0].fields == {'index': 0, 'details': 'Oil change', 'is_scheduled': True}
    assert notifications[2].fields == {'index': 0, 'is_scheduled': False}
    assert notifications[4].fields == {'index': 0, 'details': 'Hose replaced', 'is_completed': True}


def test_rejected_mutations_emit_nothing(ledger, maintenance, asset_id, notifications):
    with pytest.raises(UnauthorizedError):
        ledger.transfer_ownership(asset_id, 'bob', 'outsider')
    with pytest.raises(UnauthorizedError):
        maintenance.schedule_maintenance(asset_id, 'Oil change', 'outsider')
    assert notifications == []


def test_notifications_are_persisted_as_events(ledger, maintenance, manager, asset_id):
    maintenance.schedule_maintenance(asset_id, 'Oil change', manager)
    ledger.transfer_ownership(asset_id, 'bob', manager)

    events = Event.query.filter_by(asset_id=asset_id).order_by(Event.id).all()
    assert [e.event_type for e in events] == ['AssetRegistered', 'MaintenanceScheduled', 'OwnershipTransferProposed']
    assert events[2].payload == {'owner': 'alice', 'pending_owner': 'bob'}
    assert events[2].principal == manager
    assert events[1].description, "Every event carries a readable description"


def test_system_initialization_event(app):
    events = Event.query.filter_by(event_type='System').all()
    assert len(events) == 1, "The build records exactly one initialization event"
    assert events[0].principal == 'admin'


def test_failing_subscriber_does_not_break_the_mutation(components, ledger, manager):
    def broken(notification):
        raise RuntimeError("dashboard offline")

    unsubscribe = components.bus.subscribe(broken)
    try:
        asset_id = ledger.register_asset('alice', 'Forklift', '', manager)
    finally:
        unsubscribe()
    assert ledger.get_ownership(asset_id) == 'alice'


def test_unsubscribe():
    bus = NotificationBus()
    received = []
    unsubscribe = bus.subscribe(received.append)

    bus.publish(Notification(operation='AssetRegistered', asset_id=0))
    unsubscribe()
    bus.publish(Notification(operation='AssetRegistered', asset_id=1))

    assert [n.asset_id for n in received] == [0]


def test_notification_to_dict():
    notification = Notification(operation='RoleGranted', asset_id=None,
                                fields={'role': 'ASSET_MANAGER_ROLE', 'principal': 'bob'}, principal='admin')
    data = notification.to_dict()
    assert data['operation'] == 'RoleGranted'
    assert data['fields'] == {'role': 'ASSET_MANAGER_ROLE', 'principal': 'bob'}
    assert isinstance(data['timestamp'], str)


def test_json_formatter_includes_notification():
    """Published notifications are logged as structured JSON"""
    formatter = JsonFormatter({"level": "levelname", "message": "message"})
    record = logging.LogRecord('asset_registry.test', logging.INFO, __file__, 1, 'AssetRegistered (asset 0)', None, None)
    record.notification = {'operation': 'AssetRegistered', 'asset_id': 0}

    output = json.loads(formatter.format(record))
    assert output == {
        'level': 'INFO',
        'message': 'AssetRegistered (asset 0)',
        'notification': {'operation': 'AssetRegistered', 'asset_id': 0},
    }


def test_publish_logs_notification(ledger, manager, caplog):
    with caplog.at_level(logging.INFO, logger='asset_registry'):
        ledger.register_asset('alice', 'Forklift', '', manager)

    published = [r for r in caplog.records if getattr(r, 'notification', None)]
    assert published, "Each published notification is logged"
    assert published[-1].notification['operation'] == 'AssetRegistered'
