from flask import jsonify
from flask_login import login_required
from asset_registry.presentation.routes.api import api_bp
from asset_registry.presentation.routes.api.request_utils import components


@api_bp.get('/registry')
@login_required
def registry_info():
    ledger = components().ledger
    return jsonify({
        'name': ledger.name,
        'symbol': ledger.symbol,
        'asset_count': ledger.asset_count(),
    })
