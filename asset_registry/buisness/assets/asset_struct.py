"""
Asset Struct
Read-only snapshot of an Asset row handed to callers outside the ledger.
"""

from dataclasses import dataclass, asdict
from typing import Optional
from asset_registry.data.core.asset_info.asset import Asset


@dataclass(frozen=True)
class AssetStruct:
    id: int
    details: str
    owner: str
    pending_owner: Optional[str]
    transfer_condition: str

    @classmethod
    def from_asset(cls, asset: Asset) -> 'AssetStruct':
        return cls(
            id=asset.id,
            details=asset.details,
            owner=asset.owner,
            pending_owner=asset.pending_owner,
            transfer_condition=asset.transfer_condition,
        )

    def to_dict(self):
        return asdict(self)
