"""
Closed set of permission roles
"""

from enum import Enum


class Role(str, Enum):
    ASSET_MANAGER = 'ASSET_MANAGER_ROLE'
    MAINTENANCE_STAFF = 'MAINTENANCE_STAFF_ROLE'

    @classmethod
    def parse(cls, value) -> 'Role':
        """
        Resolve a role from its value ("ASSET_MANAGER_ROLE") or member name
        ("ASSET_MANAGER", "asset_manager").

        Raises:
            ValueError: If the value names no role
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for role in cls:
            if text == role.value or text.upper() == role.name or text.upper() == role.value:
                return role
        raise ValueError(f"Unknown role: {value}")

    @property
    def missing_message(self) -> str:
        """Rejection message for callers lacking this role"""
        return _MISSING_ROLE_MESSAGES[self]


_MISSING_ROLE_MESSAGES = {
    Role.ASSET_MANAGER: 'Caller is not an asset manager',
    Role.MAINTENANCE_STAFF: 'Caller is not maintenance staff',
}
