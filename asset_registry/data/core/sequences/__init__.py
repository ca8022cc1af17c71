"""
Sequence ID Managers
Manages database sequences for various entity types
"""

from asset_registry.data.core.sequences.asset_id_manager import AssetIDManager

__all__ = [
    'AssetIDManager',
]
