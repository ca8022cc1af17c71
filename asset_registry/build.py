#!/usr/bin/env python3
"""
Build orchestrator for the asset registry
Creates the schema, seeds the id sequence and the role authority, and
wires the domain components onto the Flask app.
"""

from dataclasses import dataclass
from flask import current_app
from asset_registry import create_app, db
from asset_registry.buisness.assets.asset_ledger import AssetLedger
from asset_registry.buisness.core.notifier import NotificationBus
from asset_registry.buisness.core.role_authority import RoleAuthority
from asset_registry.buisness.maintenance.maintenance_log import MaintenanceLog
from asset_registry.buisness.work_orders.work_order_log import WorkOrderLog
from asset_registry.logger import get_logger

logger = get_logger("asset_registry.build")

EXTENSION_KEY = 'asset_registry'


@dataclass
class RegistryComponents:
    bus: NotificationBus
    authority: RoleAuthority
    ledger: AssetLedger
    maintenance: MaintenanceLog
    work_orders: WorkOrderLog


def wire_components(app) -> RegistryComponents:
    """
    Create the component graph (leaves first) and attach it to the app.
    The components hold no state of their own; everything lives in the database.
    """
    bus = NotificationBus()
    authority = RoleAuthority(bus)
    ledger = AssetLedger(
        authority,
        bus,
        require_pending_owner_accept=bool(app.config.get('REQUIRE_PENDING_OWNER_ACCEPT')),
    )
    components = RegistryComponents(
        bus=bus,
        authority=authority,
        ledger=ledger,
        maintenance=MaintenanceLog(authority, ledger, bus),
        work_orders=WorkOrderLog(authority, ledger, bus),
    )
    app.extensions[EXTENSION_KEY] = components
    logger.debug("Registry components wired")
    return components


def get_components(app=None) -> RegistryComponents:
    app = app or current_app
    return app.extensions[EXTENSION_KEY]


def check_system_initialization():
    """
    Check if the system has been properly initialized

    Returns:
        bool: True if the role authority and the asset sequence exist
    """
    from asset_registry.data.core.roles.role_authority_record import RoleAuthorityRecord
    from asset_registry.data.core.sequences import AssetIDManager

    try:
        return (RoleAuthorityRecord.query.first() is not None
                and AssetIDManager.get_current_sequence_value() is not None)
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error checking system initialization: {e}")
        return False


def build_models():
    """Create all tables and the asset id sequence"""
    from asset_registry.data.core.sequences import AssetIDManager

    db.create_all()
    AssetIDManager.create_sequence_if_not_exists()
    logger.info("Models build completed")


def insert_critical_data(app):
    """
    Create the role authority with its admin principal and, when a password
    is configured, a login account for the admin.

    Raises:
        LedgerConfigurationError: If a different admin was recorded earlier
    """
    from asset_registry.buisness.core.user_context import UserContext
    from asset_registry.data.core.event_info.event import Event

    admin_username = app.config['ADMIN_USERNAME']
    initialized = check_system_initialization()

    RoleAuthority.initialize(admin_username)

    admin_password = app.config.get('ADMIN_PASSWORD')
    if admin_password:
        UserContext.find_or_create(admin_username, admin_password)
    elif UserContext.find(admin_username) is None:
        logger.warning(f"ADMIN_PASSWORD not set; admin '{admin_username}' has no login account")

    if not initialized:
        Event.add_event(
            event_type='System',
            description='System initialized',
            principal=admin_username,
            payload={'admin': admin_username},
        )
        db.session.commit()
        logger.info("Created system initialization event")


def build_database(app=None):
    """
    Main build entry point

    Args:
        app: Flask app to build against; a new one is created when omitted

    Returns:
        The Flask app
    """
    app = app or create_app()

    with app.app_context():
        logger.info("Starting database build")
        build_models()
        try:
            insert_critical_data(app)
        except Exception as e:
            db.session.rollback()
            logger.error(f"Critical data insertion failed: {e}")
            raise
        logger.info("Database build completed successfully")

    return app
