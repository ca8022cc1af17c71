"""
LedgerNarrator - description composer for registry events

Keeps the wording of persisted Event descriptions out of the mutation logic.
"""


class LedgerNarrator:
    """
    Composes human readable descriptions for registry events.
    """

    @staticmethod
    def role_granted(role, principal) -> str:
        return f"Role {role.value} granted to {principal}"

    @staticmethod
    def role_revoked(role, principal) -> str:
        return f"Role {role.value} revoked from {principal}"

    @staticmethod
    def asset_registered(asset_id, owner) -> str:
        return f"Asset {asset_id} registered to {owner}"

    @staticmethod
    def transfer_condition_updated(asset_id) -> str:
        return f"Transfer condition of asset {asset_id} updated"

    @staticmethod
    def ownership_transfer_proposed(asset_id, owner, pending_owner) -> str:
        return f"Ownership transfer of asset {asset_id} proposed: {owner} -> {pending_owner}"

    @staticmethod
    def ownership_transferred(asset_id, previous_owner, owner) -> str:
        return f"Ownership of asset {asset_id} transferred: {previous_owner} -> {owner}"

    @staticmethod
    def log_record_appended(log_label, asset_id, index) -> str:
        return f"{log_label} #{index} added to asset {asset_id}"

    @staticmethod
    def log_record_updated(log_label, asset_id, index, changed) -> str:
        return f"{log_label} #{index} of asset {asset_id} updated ({', '.join(changed)})"
