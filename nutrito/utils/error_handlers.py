# /nutrito/utils/error_handlers.py
from flask import current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException
from nutrito.extensions import db, jwt
from nutrito.services.errors import NutritoError
from nutrito.utils.responses import error_response

def _integrity_kind(error):
    text = str(getattr(error, 'orig', error)).lower()
    if 'foreign key' in text:
        return 'foreign_key'
    if 'unique' in text or 'duplicate' in text:
        return 'unique'
    return None

def register_error_handlers(app):
    @app.errorhandler(NutritoError)
    def domain_error(error):
        return error_response(error.code, error.message, error.status_code, error.details)

    @app.errorhandler(IntegrityError)
    def integrity_error(error):
        db.session.rollback()
        kind = _integrity_kind(error)
        if kind == 'unique':
            return error_response('DUPLICATE_ENTRY', 'The resource already exists', 409)
        if kind == 'foreign_key':
            return error_response('FOREIGN_KEY_CONSTRAINT', 'Invalid reference in the data', 400)
        current_app.logger.error(f"Unhandled integrity error: {error}")
        return error_response('INTERNAL_ERROR', 'Internal server error', 500)

    @app.errorhandler(404)
    def not_found(error):
        return error_response('NOT_FOUND', 'Resource not found', 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return error_response('METHOD_NOT_ALLOWED', 'Method not allowed', 405)

    @app.errorhandler(413)
    def file_too_large(error):
        return error_response('FILE_TOO_LARGE', 'The file exceeds the maximum allowed size', 413)

    @app.errorhandler(429)
    def rate_limited(error):
        return error_response('RATE_LIMIT_EXCEEDED', 'Too many requests, try again later', 429)

    @app.errorhandler(HTTPException)
    def http_error(error):
        code = (error.name or 'HTTP_ERROR').upper().replace(' ', '_')
        return error_response(code, error.description, error.code)

    @app.errorhandler(Exception)
    def internal_error(error):
        db.session.rollback()
        current_app.logger.exception(f"Internal server error: {str(error)}")
        message = 'Internal server error' if not (app.debug or app.testing) else str(error)
        return error_response('INTERNAL_ERROR', message, 500)

def register_jwt_handlers():
    @jwt.unauthorized_loader
    def missing_token(reason):
        return error_response('MISSING_TOKEN', 'Access token required', 401)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return error_response('INVALID_TOKEN', 'Invalid authentication token', 401)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return error_response('TOKEN_EXPIRED', 'Authentication token has expired', 401)

    @jwt.revoked_token_loader
    def revoked_token(jwt_header, jwt_payload):
        return error_response('TOKEN_REVOKED', 'Authentication token has been revoked', 401)
