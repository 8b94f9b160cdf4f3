from functools import wraps
from flask import request, current_app, make_response
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request
from sqlalchemy.exc import SQLAlchemyError
from nutrito.extensions import db
from nutrito.models.system_models import AuditLog
from nutrito.models.user_models import User
from nutrito.services.session import SessionContext
from nutrito.utils.responses import error_response

def current_session():
    """SessionContext of the authenticated caller."""
    return SessionContext(user_id=get_jwt_identity(), role=get_jwt().get('role'))

def _user_id_from_response(response):
    body = response.get_json(silent=True) or {}
    data = body.get('data') or {}
    user = data.get('user') if isinstance(data, dict) else None
    return user.get('id') if user else None

def audit_log(action, resource):
    """Records every call of the wrapped view in the audit trail."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user_id = None
            resource_id = next(iter(kwargs.values()), None)
            ip_address = request.remote_addr
            user_agent = request.headers.get('User-Agent')

            try:
                user_id = get_jwt_identity()
            except RuntimeError:
                # No JWT token present (registration or login)
                pass

            if action in ("USER_REGISTRATION", "USER_LOGIN") and request.is_json:
                data = request.get_json(silent=True)
                if isinstance(data, dict):
                    resource_id = data.get('email')

            try:
                # make_response handles both Response objects and tuples
                raw_response = f(*args, **kwargs)
                response = make_response(raw_response)

                success = response.status_code < 400
                details = f"Request successful. Status: {response.status_code}"

                if action in ("USER_REGISTRATION", "USER_LOGIN") and success:
                    user_id = _user_id_from_response(response)

                log_entry = AuditLog(
                    user_id=user_id,
                    action=action,
                    resource=resource,
                    resource_id=resource_id,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    success=success,
                    details=details
                )
                db.session.add(log_entry)
                db.session.commit()
                current_app.audit_logger.info(
                    f"Action='{action}', Resource='{resource}', UserID='{user_id}', Success='{success}', Details='{details}'"
                )

                return response

            except Exception as e:
                details = f"An error occurred: {str(e)}"
                try:
                    # Discard whatever the failed view left in the session
                    db.session.rollback()
                    db.session.add(AuditLog(
                        user_id=user_id,
                        action=action,
                        resource=resource,
                        resource_id=resource_id,
                        ip_address=ip_address,
                        user_agent=user_agent,
                        success=False,
                        details=details
                    ))
                    db.session.commit()
                except SQLAlchemyError as db_error:
                    current_app.audit_logger.error(f"Failed to log audit entry due to DB error: {db_error}")
                    db.session.rollback()

                current_app.audit_logger.error(
                    f"Action='{action}', Resource='{resource}', UserID='{user_id}', Success='False', Details='{details}'"
                )

                raise

        return decorated_function
    return decorator

def require_role(*roles):
    """Allows the call only for active accounts whose token carries one of ``roles``."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            verify_jwt_in_request()
            user = db.session.get(User, get_jwt_identity())

            if not user or not user.is_active:
                return error_response('ACCOUNT_DISABLED', 'User not found or inactive', 403)

            if get_jwt().get('role') not in roles:
                return error_response(
                    'INSUFFICIENT_PERMISSIONS', 'Your role does not allow this operation', 403
                )

            return f(*args, **kwargs)
        return decorated_function
    return decorator
