"""
Routes package for the asset registry
JSON API blueprints over the role authority, the ledger and the asset logs
"""

from asset_registry import csrf
from asset_registry.logger import get_logger

logger = get_logger("asset_registry.routes")


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from asset_registry.presentation.routes.api import api_bp

    # Session-authenticated JSON API; form CSRF tokens do not apply
    csrf.exempt(api_bp)
    app.register_blueprint(api_bp, url_prefix='/api')

    logger.debug("Route blueprints registered")
