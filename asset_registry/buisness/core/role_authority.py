"""
Role Authority
Admin-managed role membership oracle consulted before every mutation.

Handles:
- The fixed admin principal (set once when the system is built)
- Granting and revoking roles (admin only, idempotent)
- Membership queries used by the asset ledger and the asset logs
"""

from typing import List, Optional, Set, Union
from asset_registry import db
from asset_registry.buisness.core.errors import LedgerConfigurationError, UnauthorizedError
from asset_registry.buisness.core.narrator import LedgerNarrator
from asset_registry.buisness.core.notifier import NotificationBus
from asset_registry.buisness.core.roles import Role
from asset_registry.buisness.core.transaction import atomic
from asset_registry.data.core.roles.role_assignment import RoleAssignment
from asset_registry.data.core.roles.role_authority_record import RoleAuthorityRecord
from asset_registry.logger import get_logger

logger = get_logger("asset_registry.buisness.core.role_authority")


class RoleAuthority:
    """
    Role membership over the closed Role set.

    Permission checks are explicit predicates (``has_role`` / ``require_role``)
    evaluated at each entry point of the ledger and the logs.
    """

    def __init__(self, bus: Optional[NotificationBus] = None):
        self._bus = bus

    @staticmethod
    def initialize(admin_principal: str) -> RoleAuthorityRecord:
        """
        Create the authority record with its admin principal if it does not exist yet.

        Raises:
            LedgerConfigurationError: If an authority already exists with a different admin
        """
        if not admin_principal:
            raise LedgerConfigurationError("Admin principal is required")

        record = RoleAuthorityRecord.query.first()
        if record is None:
            record = RoleAuthorityRecord(admin_principal=admin_principal)
            db.session.add(record)
            db.session.commit()
            logger.info(f"Role authority created with admin {admin_principal}")
            return record

        if record.admin_principal != admin_principal:
            raise LedgerConfigurationError(
                f"Role authority admin is {record.admin_principal}; it cannot be changed to {admin_principal}"
            )
        return record

    def get_admin(self) -> str:
        """Get the admin principal"""
        record = RoleAuthorityRecord.query.first()
        if record is None:
            raise LedgerConfigurationError()
        return record.admin_principal

    def is_admin(self, principal: str) -> bool:
        record = RoleAuthorityRecord.query.first()
        return record is not None and principal is not None and record.admin_principal == principal

    def _require_admin(self, caller: str) -> None:
        if not self.is_admin(caller):
            raise UnauthorizedError('Caller is not an admin')

    def grant_role(self, role: Union[Role, str], principal: str, caller: str) -> bool:
        """
        Add principal to role. Granting a held role is a no-op.

        Args:
            role: Role (or role name) to grant
            principal: Principal receiving the role
            caller: Principal performing the call; must be the admin

        Returns:
            True if membership changed, False if the principal already held the role

        Raises:
            UnauthorizedError: If caller is not the admin
            ValueError: If role names no role
        """
        with atomic('grantRole', caller, self._bus) as txn:
            self._require_admin(caller)
            role = Role.parse(role)
            if self._find(role, principal) is not None:
                logger.debug(f"{principal} already holds {role.value}")
                return False
            db.session.add(RoleAssignment(role=role.value, principal=principal, granted_by=caller))
            txn.notify('RoleGranted', None, {'role': role.value, 'principal': principal},
                       LedgerNarrator.role_granted(role, principal))
        return True

    def revoke_role(self, role: Union[Role, str], principal: str, caller: str) -> bool:
        """
        Remove principal from role. Revoking an unheld role is a no-op.

        Returns:
            True if membership changed, False if the principal did not hold the role

        Raises:
            UnauthorizedError: If caller is not the admin
            ValueError: If role names no role
        """
        with atomic('revokeRole', caller, self._bus) as txn:
            self._require_admin(caller)
            role = Role.parse(role)
            assignment = self._find(role, principal)
            if assignment is None:
                logger.debug(f"{principal} does not hold {role.value}")
                return False
            db.session.delete(assignment)
            txn.notify('RoleRevoked', None, {'role': role.value, 'principal': principal},
                       LedgerNarrator.role_revoked(role, principal))
        return True

    def has_role(self, role: Union[Role, str], principal: str) -> bool:
        """Check role membership. Unrestricted."""
        if principal is None:
            return False
        return self._find(Role.parse(role), principal) is not None

    def require_role(self, role: Role, principal: str) -> None:
        """
        Raises:
            UnauthorizedError: If principal does not hold role
        """
        if not self.has_role(role, principal):
            raise UnauthorizedError(role.missing_message)

    def roles_of(self, principal: str) -> Set[Role]:
        """Get every role held by principal"""
        assignments = RoleAssignment.query.filter_by(principal=principal).all()
        return {Role(a.role) for a in assignments}

    def members(self, role: Union[Role, str]) -> List[str]:
        """Get principals holding role, in grant order"""
        role = Role.parse(role)
        assignments = RoleAssignment.query.filter_by(role=role.value).order_by(RoleAssignment.id.asc()).all()
        return [a.principal for a in assignments]

    # Per-role wrappers

    def grant_asset_manager_role(self, principal: str, caller: str) -> bool:
        return self.grant_role(Role.ASSET_MANAGER, principal, caller)

    def revoke_asset_manager_role(self, principal: str, caller: str) -> bool:
        return self.revoke_role(Role.ASSET_MANAGER, principal, caller)

    def grant_maintenance_staff_role(self, principal: str, caller: str) -> bool:
        return self.grant_role(Role.MAINTENANCE_STAFF, principal, caller)

    def revoke_maintenance_staff_role(self, principal: str, caller: str) -> bool:
        return self.revoke_role(Role.MAINTENANCE_STAFF, principal, caller)

    @staticmethod
    def _find(role: Role, principal: str) -> Optional[RoleAssignment]:
        return RoleAssignment.query.filter_by(role=role.value, principal=principal).first()
