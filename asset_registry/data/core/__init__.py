"""
Core models package for the asset registry
"""

from .user_info.user import User
from .roles.role_authority_record import RoleAuthorityRecord
from .roles.role_assignment import RoleAssignment
from .asset_info.asset import Asset
from .event_info.event import Event
# VirtualSequenceGenerator remains in data/core (data layer infrastructure - used by sequence ID managers)

__all__ = [
    'User',
    'RoleAuthorityRecord',
    'RoleAssignment',
    'Asset',
    'Event',
]
