"""
Maintenance Business Layer
Maintenance schedule kept per asset by asset managers.
"""

from asset_registry.buisness.maintenance.maintenance_log import MaintenanceEntry, MaintenanceLog

__all__ = ['MaintenanceEntry', 'MaintenanceLog']
