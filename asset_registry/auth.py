from flask import Blueprint, jsonify, request
from flask_login import login_user, logout_user, login_required, current_user
from asset_registry import csrf, limiter, login_manager
from asset_registry.data.core.user_info.user import User
from asset_registry.logger import get_logger

logger = get_logger("asset_registry.auth")
auth = Blueprint('auth', __name__)
csrf.exempt(auth)


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({'error': 'Unauthenticated', 'message': 'Please log in to access this resource.'}), 401


@auth.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
def login():
    if current_user.is_authenticated:
        logger.debug(f"User {current_user.username} already authenticated")
        return jsonify({'principal': current_user.username})

    data = request.get_json(silent=True) or {}
    username = data.get('username')
    password = data.get('password')

    logger.debug(f"Login attempt for username: {username}")

    if not username or not password:
        logger.warning(f"Login attempt with missing credentials for username: {username}")
        return jsonify({'error': 'BadRequest', 'message': 'Please enter both username and password'}), 400

    user = User.query.filter_by(username=username).first()

    if user is None or not user.check_password(password):
        logger.warning(f"Failed login attempt for username: {username}")
        return jsonify({'error': 'Unauthenticated', 'message': 'Invalid username or password'}), 401

    if not user.is_active:
        logger.warning(f"Login attempt for disabled account: {username}")
        return jsonify({'error': 'Unauthenticated', 'message': 'Account is disabled'}), 401

    login_user(user)
    logger.info(f"Successful login for user: {username}")
    return jsonify({'principal': user.username})


@auth.route('/logout', methods=['POST'])
@login_required
def logout():
    username = current_user.username
    logout_user()
    logger.info(f"User logged out: {username}")
    return jsonify({'principal': None})


@auth.route('/whoami')
@login_required
def whoami():
    from asset_registry.build import get_components

    authority = get_components().authority
    return jsonify({
        'principal': current_user.username,
        'is_admin': authority.is_admin(current_user.username),
        'roles': sorted(role.value for role in authority.roles_of(current_user.username)),
    })
