from asset_registry.buisness.assets.asset_ledger import AssetLedger
from asset_registry.buisness.assets.asset_struct import AssetStruct

__all__ = ['AssetLedger', 'AssetStruct']
