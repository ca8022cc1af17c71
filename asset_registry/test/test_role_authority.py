"""
Tests for the role authority: admin-only grant/revoke and membership queries.
"""

import pytest
from asset_registry.buisness.core.errors import LedgerConfigurationError, UnauthorizedError
from asset_registry.buisness.core.role_authority import RoleAuthority
from asset_registry.buisness.core.roles import Role
from asset_registry.data.core.event_info.event import Event


def test_admin_is_fixed_at_build(authority):
    """The configured admin becomes the authority's admin"""
    assert authority.get_admin() == 'admin'
    assert authority.is_admin('admin')
    assert not authority.is_admin('manager'), "Only the configured principal is admin"
    assert not authority.is_admin(None)


def test_initialize_rejects_a_different_admin(app):
    """The admin principal cannot be changed once recorded"""
    assert RoleAuthority.initialize('admin').admin_principal == 'admin'
    with pytest.raises(LedgerConfigurationError):
        RoleAuthority.initialize('mallory')


def test_grant_and_revoke_asset_manager(authority):
    assert not authority.has_role(Role.ASSET_MANAGER, 'bob')

    assert authority.grant_asset_manager_role('bob', 'admin') is True
    assert authority.has_role(Role.ASSET_MANAGER, 'bob')
    assert not authority.has_role(Role.MAINTENANCE_STAFF, 'bob'), "Roles are independent"

    assert authority.revoke_asset_manager_role('bob', 'admin') is True
    assert not authority.has_role(Role.ASSET_MANAGER, 'bob')


def test_grant_and_revoke_maintenance_staff(authority):
    assert authority.grant_maintenance_staff_role('carol', 'admin') is True
    assert authority.has_role('MAINTENANCE_STAFF_ROLE', 'carol'), "Roles resolve from their value"
    assert authority.revoke_maintenance_staff_role('carol', 'admin') is True
    assert not authority.has_role(Role.MAINTENANCE_STAFF, 'carol')


def test_grant_is_idempotent(authority, notifications):
    """Granting a held role changes nothing and emits nothing"""
    assert authority.grant_role(Role.ASSET_MANAGER, 'bob', 'admin') is True
    assert authority.grant_role(Role.ASSET_MANAGER, 'bob', 'admin') is False
    assert authority.members(Role.ASSET_MANAGER) == ['bob']
    assert [n.operation for n in notifications] == ['RoleGranted']


def test_revoke_unheld_role_is_noop(authority, notifications):
    assert authority.revoke_role(Role.MAINTENANCE_STAFF, 'nobody', 'admin') is False
    assert notifications == []


@pytest.mark.parametrize('caller', ['bob', 'manager', None])
def test_non_admin_cannot_grant(authority, manager, caller):
    """Even role holders cannot grant roles"""
    with pytest.raises(UnauthorizedError) as exc_info:
        authority.grant_role(Role.ASSET_MANAGER, 'bob', caller)
    assert exc_info.value.message == 'Caller is not an admin'
    assert not authority.has_role(Role.ASSET_MANAGER, 'bob')


def test_non_admin_cannot_revoke(authority, manager):
    with pytest.raises(UnauthorizedError):
        authority.revoke_asset_manager_role(manager, manager)
    assert authority.has_role(Role.ASSET_MANAGER, manager), "Failed revoke leaves membership intact"


def test_admin_can_hold_roles(authority):
    """The admin holds no role implicitly but may grant itself one"""
    assert not authority.has_role(Role.ASSET_MANAGER, 'admin')
    authority.grant_asset_manager_role('admin', 'admin')
    assert authority.has_role(Role.ASSET_MANAGER, 'admin')


def test_roles_of_and_members(authority):
    authority.grant_asset_manager_role('dana', 'admin')
    authority.grant_maintenance_staff_role('dana', 'admin')
    authority.grant_maintenance_staff_role('erin', 'admin')

    assert authority.roles_of('dana') == {Role.ASSET_MANAGER, Role.MAINTENANCE_STAFF}
    assert authority.roles_of('nobody') == set()
    assert authority.members(Role.MAINTENANCE_STAFF) == ['dana', 'erin'], "Members come back in grant order"


def test_require_role_messages(authority):
    with pytest.raises(UnauthorizedError, match='Caller is not an asset manager'):
        authority.require_role(Role.ASSET_MANAGER, 'bob')
    with pytest.raises(UnauthorizedError, match='Caller is not maintenance staff'):
        authority.require_role(Role.MAINTENANCE_STAFF, 'bob')


def test_unknown_role_is_rejected(authority):
    with pytest.raises(ValueError):
        authority.grant_role('AUDITOR_ROLE', 'bob', 'admin')
    with pytest.raises(ValueError):
        authority.revoke_role('AUDITOR_ROLE', 'bob', 'admin')


def test_non_admin_is_rejected_before_role_lookup(authority, manager):
    """A non-admin naming an unknown role is Unauthorized, not a bad role"""
    with pytest.raises(UnauthorizedError, match='Caller is not an admin'):
        authority.grant_role('AUDITOR_ROLE', 'bob', manager)
    with pytest.raises(UnauthorizedError, match='Caller is not an admin'):
        authority.revoke_role('AUDITOR_ROLE', 'bob', manager)


def test_role_changes_are_recorded_as_events(authority):
    authority.grant_asset_manager_role('bob', 'admin')
    authority.revoke_asset_manager_role('bob', 'admin')

    events = Event.query.filter(Event.event_type.in_(['RoleGranted', 'RoleRevoked'])).order_by(Event.id).all()
    assert [e.event_type for e in events] == ['RoleGranted', 'RoleRevoked']
    assert events[0].principal == 'admin'
    assert events[0].payload == {'role': 'ASSET_MANAGER_ROLE', 'principal': 'bob'}
    assert events[0].asset_id is None
