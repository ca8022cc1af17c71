from flask import jsonify, request
from flask_login import login_required
from asset_registry.data.core.event_info.event import Event
from asset_registry.presentation.routes.api import api_bp
from asset_registry.presentation.routes.api.request_utils import caller, components, json_body, require_string


@api_bp.get('/assets')
@login_required
def list_assets():
    owner = request.args.get('owner', type=str)
    assets = components().ledger.list_assets(owner=owner)
    return jsonify([a.to_dict() for a in assets])


@api_bp.post('/assets')
@login_required
def register_asset():
    data = json_body()
    owner = require_string(data, 'owner', allow_empty=False)
    details = require_string(data, 'details')
    transfer_condition = require_string(data, 'transfer_condition')

    asset_id = components().ledger.register_asset(owner, details, transfer_condition, caller())
    return jsonify({'asset_id': asset_id}), 201


@api_bp.get('/assets/<int:asset_id>')
@login_required
def get_asset(asset_id):
    return jsonify(components().ledger.get_asset(asset_id).to_dict())


@api_bp.get('/assets/<int:asset_id>/details')
@login_required
def get_asset_details(asset_id):
    return jsonify({'asset_id': asset_id, 'details': components().ledger.get_asset_details(asset_id)})


@api_bp.get('/assets/<int:asset_id>/owner')
@login_required
def get_ownership(asset_id):
    ledger = components().ledger
    return jsonify({
        'asset_id': asset_id,
        'owner': ledger.get_ownership(asset_id),
        'pending_owner': ledger.get_pending_owner(asset_id),
        'state': ledger.get_ownership_state(asset_id),
    })


@api_bp.get('/assets/<int:asset_id>/transfer-condition')
@login_required
def get_transfer_condition(asset_id):
    return jsonify({'asset_id': asset_id,
                    'transfer_condition': components().ledger.get_transfer_condition(asset_id)})


@api_bp.put('/assets/<int:asset_id>/transfer-condition')
@login_required
def set_transfer_condition(asset_id):
    condition = require_string(json_body(), 'transfer_condition')
    components().ledger.set_transfer_condition(asset_id, condition, caller())
    return jsonify({'asset_id': asset_id, 'transfer_condition': condition})


@api_bp.post('/assets/<int:asset_id>/transfer')
@login_required
def transfer_ownership(asset_id):
    new_owner = require_string(json_body(), 'new_owner', allow_empty=False)
    components().ledger.transfer_ownership(asset_id, new_owner, caller())
    return jsonify({'asset_id': asset_id, 'pending_owner': new_owner})


@api_bp.post('/assets/<int:asset_id>/accept')
@login_required
def accept_ownership(asset_id):
    owner = components().ledger.accept_ownership(asset_id, caller())
    return jsonify({'asset_id': asset_id, 'owner': owner})


@api_bp.get('/assets/<int:asset_id>/events')
@login_required
def asset_events(asset_id):
    # Existence check raises NotFound for unregistered ids
    components().ledger.get_asset(asset_id)
    events = Event.query.filter_by(asset_id=asset_id).order_by(Event.id.asc()).all()
    return jsonify([e.to_dict() for e in events])
