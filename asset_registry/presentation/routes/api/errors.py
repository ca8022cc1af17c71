from flask import jsonify, request
from werkzeug.exceptions import HTTPException
from asset_registry.buisness.core.errors import (
    AssetNotFoundError,
    InvalidIndexError,
    LedgerDomainError,
    TransferNotPendingError,
    UnauthorizedError,
)
from asset_registry.presentation.routes.api import api_bp

STATUS_BY_ERROR = {
    UnauthorizedError: 403,
    AssetNotFoundError: 404,
    InvalidIndexError: 400,
    TransferNotPendingError: 409,
}


@api_bp.errorhandler(LedgerDomainError)
def handle_domain_error(error: LedgerDomainError):
    status = next((code for cls, code in STATUS_BY_ERROR.items() if isinstance(error, cls)), 500)
    return jsonify(error.to_dict()), status


@api_bp.app_errorhandler(HTTPException)
def handle_http_error(error: HTTPException):
    # Routing errors (unknown path, rejected converter) never reach blueprint handlers
    if not request.path.startswith('/api/'):
        return error
    return jsonify({'error': error.name.replace(' ', ''), 'message': error.description}), error.code
