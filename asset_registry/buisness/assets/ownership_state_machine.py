"""
State machine for the ownership sub-state of an asset

Stable (no pending owner) -> transferOwnership -> PendingTransfer
PendingTransfer -> transferOwnership -> PendingTransfer (pending owner overwritten)
PendingTransfer -> acceptOwnership -> Stable (owner replaced)
"""

from typing import Dict, Set
from asset_registry.buisness.core.errors import TransferNotPendingError


class OwnershipStateMachine:

    STABLE = 'Stable'
    PENDING_TRANSFER = 'PendingTransfer'

    PROPOSE = 'transferOwnership'
    ACCEPT = 'acceptOwnership'

    # Valid transitions: from_state -> set of allowed operations
    TRANSITIONS: Dict[str, Set[str]] = {
        STABLE: {PROPOSE},
        PENDING_TRANSFER: {PROPOSE, ACCEPT},
    }

    @classmethod
    def state_of(cls, asset) -> str:
        return cls.PENDING_TRANSFER if asset.has_pending_transfer else cls.STABLE

    @classmethod
    def can_apply(cls, asset, operation: str) -> bool:
        return operation in cls.TRANSITIONS.get(cls.state_of(asset), set())

    @classmethod
    def validate(cls, asset, operation: str) -> None:
        """
        Raises:
            TransferNotPendingError: If operation is not allowed in the asset's current state
        """
        if not cls.can_apply(asset, operation):
            raise TransferNotPendingError(
                f"No ownership transfer is pending for asset {asset.id}"
            )
