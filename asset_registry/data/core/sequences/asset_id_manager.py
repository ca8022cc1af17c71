"""
Asset ID Manager
Manages the asset id sequence used by asset registration
"""

from asset_registry.data.core.virtual_sequence_generator import VirtualSequenceGenerator


class AssetIDManager(VirtualSequenceGenerator):
    """
    Issues asset ids 0, 1, 2, ... exactly once each
    """

    start_value = 0

    @classmethod
    def get_sequence_table_name(cls):
        return "_sequence_asset_id"

    @classmethod
    def get_next_asset_id(cls):
        """
        Get the next available asset ID
        Uses the base class method for thread safety
        """
        return cls.get_next_id()
