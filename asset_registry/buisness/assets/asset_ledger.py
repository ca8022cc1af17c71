"""
Asset Ledger
Owns the asset table: id allocation, metadata, ownership and transfer conditions.

Handles:
- Registration with sequential ids starting at 0
- Unrestricted reads of details, owner and transfer condition
- Transfer condition updates
- The two-phase ownership transfer (propose, then accept)

Every mutation requires the AssetManager role and runs atomically.
"""

from typing import List, Optional
from asset_registry import db
from asset_registry.buisness.assets.asset_struct import AssetStruct
from asset_registry.buisness.assets.ownership_state_machine import OwnershipStateMachine
from asset_registry.buisness.core.errors import AssetNotFoundError, UnauthorizedError
from asset_registry.buisness.core.narrator import LedgerNarrator
from asset_registry.buisness.core.notifier import NotificationBus
from asset_registry.buisness.core.role_authority import RoleAuthority
from asset_registry.buisness.core.roles import Role
from asset_registry.buisness.core.transaction import atomic
from asset_registry.data.core.asset_info.asset import Asset
from asset_registry.data.core.sequences import AssetIDManager
from asset_registry.logger import get_logger

logger = get_logger("asset_registry.buisness.assets.asset_ledger")


class AssetLedger:
    """
    Asset registry backed by the ``assets`` table.

    Args:
        authority: RoleAuthority consulted for the AssetManager role
        bus: NotificationBus receiving committed notifications
        require_pending_owner_accept: When True, acceptOwnership must be
            called by the pending owner (in addition to holding AssetManager)
    """

    name = 'AssetRegistry'
    symbol = 'ASSET'

    def __init__(self, authority: RoleAuthority, bus: Optional[NotificationBus] = None,
                 require_pending_owner_accept: bool = False):
        self._authority = authority
        self._bus = bus
        self.require_pending_owner_accept = require_pending_owner_accept

    # Existence and reads

    def asset_exists(self, asset_id: int) -> bool:
        """Check whether asset_id was ever registered"""
        return self._find(asset_id) is not None

    def get_asset(self, asset_id: int) -> AssetStruct:
        return AssetStruct.from_asset(self._get(asset_id))

    def get_asset_details(self, asset_id: int) -> str:
        return self._get(asset_id).details

    def get_ownership(self, asset_id: int) -> str:
        return self._get(asset_id).owner

    def get_transfer_condition(self, asset_id: int) -> str:
        return self._get(asset_id).transfer_condition

    def get_pending_owner(self, asset_id: int) -> Optional[str]:
        """Get the proposed owner, or None when no transfer is in flight"""
        return self._get(asset_id).pending_owner

    def get_ownership_state(self, asset_id: int) -> str:
        return OwnershipStateMachine.state_of(self._get(asset_id))

    def list_assets(self, owner: Optional[str] = None) -> List[AssetStruct]:
        """
        List registered assets in id order.

        Args:
            owner: Only assets currently owned by this principal
        """
        query = Asset.query
        if owner is not None:
            query = query.filter(Asset.owner == owner)
        return [AssetStruct.from_asset(a) for a in query.order_by(Asset.id.asc()).all()]

    def asset_count(self) -> int:
        return Asset.query.count()

    # Mutations

    def register_asset(self, initial_owner: str, details: str, transfer_condition: str, caller: str) -> int:
        """
        Register a new asset.

        Args:
            initial_owner: Principal owning the asset
            details: Free-form asset metadata
            transfer_condition: Condition attached to future transfers
            caller: Principal performing the call; must hold AssetManager

        Returns:
            The new asset id

        Raises:
            UnauthorizedError: If caller is not an asset manager
        """
        with atomic('registerAsset', caller, self._bus) as txn:
            self._authority.require_role(Role.ASSET_MANAGER, caller)

            asset_id = AssetIDManager.get_next_asset_id()
            asset = Asset(
                id=asset_id,
                details=details,
                owner=initial_owner,
                pending_owner=None,
                transfer_condition=transfer_condition,
                created_by=caller,
                updated_by=caller,
            )
            db.session.add(asset)
            db.session.flush()

            txn.notify('AssetRegistered', asset_id, {
                'owner': initial_owner,
                'details': details,
                'transfer_condition': transfer_condition,
            }, LedgerNarrator.asset_registered(asset_id, initial_owner))

        return asset_id

    def set_transfer_condition(self, asset_id: int, new_condition: str, caller: str) -> None:
        """
        Overwrite the transfer condition of an asset.

        Raises:
            UnauthorizedError: If caller is not an asset manager
            AssetNotFoundError: If asset_id was never registered
        """
        with atomic('setTransferCondition', caller, self._bus) as txn:
            self._authority.require_role(Role.ASSET_MANAGER, caller)
            asset = self._get(asset_id)

            asset.transfer_condition = new_condition
            asset.updated_by = caller

            txn.notify('TransferConditionUpdated', asset_id, {'transfer_condition': new_condition},
                       LedgerNarrator.transfer_condition_updated(asset_id))

    def transfer_ownership(self, asset_id: int, new_owner: str, caller: str) -> None:
        """
        Propose new_owner as the next owner. The current owner stays in place
        until acceptOwnership; a later proposal overwrites this one.

        Raises:
            UnauthorizedError: If caller is not an asset manager
            AssetNotFoundError: If asset_id was never registered
        """
        with atomic('transferOwnership', caller, self._bus) as txn:
            self._authority.require_role(Role.ASSET_MANAGER, caller)
            asset = self._get(asset_id)
            OwnershipStateMachine.validate(asset, OwnershipStateMachine.PROPOSE)

            asset.pending_owner = new_owner
            asset.updated_by = caller

            txn.notify('OwnershipTransferProposed', asset_id, {
                'owner': asset.owner,
                'pending_owner': new_owner,
            }, LedgerNarrator.ownership_transfer_proposed(asset_id, asset.owner, new_owner))

    def accept_ownership(self, asset_id: int, caller: str) -> str:
        """
        Complete a proposed transfer: owner := pending owner, pending owner cleared.

        Returns:
            The new owner

        Raises:
            UnauthorizedError: If caller is not an asset manager, or (when
                pending-owner acceptance is enforced) caller is not the pending owner
            AssetNotFoundError: If asset_id was never registered
            TransferNotPendingError: If no transfer was proposed
        """
        with atomic('acceptOwnership', caller, self._bus) as txn:
            self._authority.require_role(Role.ASSET_MANAGER, caller)
            asset = self._get(asset_id)
            OwnershipStateMachine.validate(asset, OwnershipStateMachine.ACCEPT)

            if self.require_pending_owner_accept and caller != asset.pending_owner:
                raise UnauthorizedError('Caller is not the pending owner')

            previous_owner = asset.owner
            asset.owner = asset.pending_owner
            asset.pending_owner = None
            asset.updated_by = caller

            txn.notify('OwnershipTransferred', asset_id, {
                'previous_owner': previous_owner,
                'owner': asset.owner,
            }, LedgerNarrator.ownership_transferred(asset_id, previous_owner, asset.owner))

            new_owner = asset.owner

        return new_owner

    @staticmethod
    def _find(asset_id) -> Optional[Asset]:
        if not isinstance(asset_id, int) or isinstance(asset_id, bool) or asset_id < 0:
            return None
        # Ids above the counter were never issued
        last_issued = AssetIDManager.get_current_sequence_value()
        if last_issued is None or asset_id > last_issued:
            return None
        return db.session.get(Asset, asset_id)

    def _get(self, asset_id) -> Asset:
        asset = self._find(asset_id)
        if asset is None:
            logger.debug(f"Asset lookup failed for id {asset_id}")
            raise AssetNotFoundError(asset_id)
        return asset
