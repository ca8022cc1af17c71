from flask import jsonify
from flask_login import login_required
from asset_registry.presentation.routes.api import api_bp
from asset_registry.presentation.routes.api.request_utils import (
    caller,
    components,
    json_body,
    require_bool,
    require_string,
)


@api_bp.get('/assets/<int:asset_id>/work-orders')
@login_required
def get_work_orders(asset_id):
    entries = components().work_orders.get_work_orders(asset_id)
    return jsonify([e.to_dict() for e in entries])


@api_bp.post('/assets/<int:asset_id>/work-orders')
@login_required
def create_work_order(asset_id):
    details = require_string(json_body(), 'details')
    index = components().work_orders.create_work_order(asset_id, details, caller())
    return jsonify({'asset_id': asset_id, 'index': index}), 201


@api_bp.put('/assets/<int:asset_id>/work-orders/<int:index>')
@login_required
def update_work_order(asset_id, index):
    data = json_body()
    details = require_string(data, 'details')
    is_completed = require_bool(data, 'is_completed')
    components().work_orders.update_work_order(asset_id, index, details, is_completed, caller())
    return jsonify({'asset_id': asset_id, 'index': index, 'details': details, 'is_completed': is_completed})
