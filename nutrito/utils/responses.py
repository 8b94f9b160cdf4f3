# /nutrito/utils/responses.py
from datetime import datetime, timezone

from flask import jsonify, request


def success_response(data=None, status=200, pagination=None, message=None):
    body = {'data': data}
    if pagination is not None:
        body['pagination'] = pagination
    if message:
        body['message'] = message
    return jsonify(body), status


def page_response(page, serialize):
    """List payload with its pagination block."""
    return success_response([serialize(item) for item in page.items], pagination=page.pagination)


def error_response(code, message, status, details=None):
    error = {'code': code, 'message': message}
    if details:
        error['details'] = details
    return jsonify({
        'error': error,
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'path': request.path,
    }), status
