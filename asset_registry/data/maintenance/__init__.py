from .maintenance_record import MaintenanceRecord
