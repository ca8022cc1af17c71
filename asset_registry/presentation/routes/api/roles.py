from flask import jsonify
from flask_login import login_required
from werkzeug.exceptions import BadRequest
from asset_registry.buisness.core.roles import Role
from asset_registry.logger import get_logger
from asset_registry.presentation.routes.api import api_bp
from asset_registry.presentation.routes.api.request_utils import caller, components, json_body, require_string

logger = get_logger("asset_registry.routes.api.roles")


def _parse_role(role_name: str) -> Role:
    try:
        return Role.parse(role_name)
    except ValueError as e:
        raise BadRequest(str(e))


@api_bp.get('/roles')
@login_required
def list_roles():
    authority = components().authority
    return jsonify({
        'admin': authority.get_admin(),
        'roles': {role.value: authority.members(role) for role in Role},
    })


@api_bp.get('/roles/<role_name>/members')
@login_required
def role_members(role_name):
    role = _parse_role(role_name)
    return jsonify({'role': role.value, 'members': components().authority.members(role)})


@api_bp.post('/roles/<role_name>/members')
@login_required
def grant_role(role_name):
    principal = require_string(json_body(), 'principal', allow_empty=False)
    # The admin check runs before the role name is resolved
    try:
        changed = components().authority.grant_role(role_name, principal, caller())
    except ValueError as e:
        raise BadRequest(str(e))
    role = _parse_role(role_name)
    return jsonify({'role': role.value, 'principal': principal, 'has_role': True, 'changed': changed})


@api_bp.delete('/roles/<role_name>/members/<principal>')
@login_required
def revoke_role(role_name, principal):
    try:
        changed = components().authority.revoke_role(role_name, principal, caller())
    except ValueError as e:
        raise BadRequest(str(e))
    role = _parse_role(role_name)
    return jsonify({'role': role.value, 'principal': principal, 'has_role': False, 'changed': changed})


@api_bp.get('/roles/<role_name>/members/<principal>')
@login_required
def has_role(role_name, principal):
    role = _parse_role(role_name)
    return jsonify({'role': role.value, 'principal': principal,
                    'has_role': components().authority.has_role(role, principal)})
