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


@api_bp.get('/assets/<int:asset_id>/maintenance')
@login_required
def get_maintenance_schedule(asset_id):
    entries = components().maintenance.get_maintenance_schedule(asset_id)
    return jsonify([e.to_dict() for e in entries])


@api_bp.post('/assets/<int:asset_id>/maintenance')
@login_required
def schedule_maintenance(asset_id):
    details = require_string(json_body(), 'details')
    index = components().maintenance.schedule_maintenance(asset_id, details, caller())
    return jsonify({'asset_id': asset_id, 'index': index}), 201


@api_bp.put('/assets/<int:asset_id>/maintenance/<int:index>')
@login_required
def update_maintenance_details(asset_id, index):
    details = require_string(json_body(), 'details')
    components().maintenance.update_maintenance_details(asset_id, index, details, caller())
    return jsonify({'asset_id': asset_id, 'index': index, 'details': details})


@api_bp.put('/assets/<int:asset_id>/maintenance/<int:index>/status')
@login_required
def update_maintenance_status(asset_id, index):
    is_scheduled = require_bool(json_body(), 'is_scheduled')
    components().maintenance.update_maintenance_status(asset_id, index, is_scheduled, caller())
    return jsonify({'asset_id': asset_id, 'index': index, 'is_scheduled': is_scheduled})
