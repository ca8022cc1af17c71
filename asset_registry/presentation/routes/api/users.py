from flask import jsonify
from flask_login import login_required
from werkzeug.exceptions import BadRequest
from asset_registry.buisness.core.errors import UnauthorizedError
from asset_registry.buisness.core.user_context import UserContext
from asset_registry.logger import get_logger
from asset_registry.presentation.routes.api import api_bp
from asset_registry.presentation.routes.api.request_utils import caller, components, json_body, require_string

logger = get_logger("asset_registry.routes.api.users")


@api_bp.post('/users')
@login_required
def create_user():
    """Create a login account for a principal (admin only)"""
    if not components().authority.is_admin(caller()):
        raise UnauthorizedError('Caller is not an admin')

    data = json_body()
    username = require_string(data, 'username', allow_empty=False)
    password = require_string(data, 'password', allow_empty=False)

    try:
        context = UserContext.create(username, password)
    except ValueError as e:
        raise BadRequest(str(e))

    logger.info(f"User {context.principal} created by {caller()}")
    return jsonify({'principal': context.principal}), 201
