"""
Request guards shared by the blueprints.

    @owned('farm')                 → <int:id> becomes a `farm` kwarg
    @owned('field', arg='farmId')  → <int:farmId> is checked, view gets `field`
"""

from functools import wraps

from flask import jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required

from farmtrack.services.ownership import authorize


def caller_id():
    return get_jwt_identity()


def owned(kind, arg='id'):
    """Require a session and prove the caller owns the entity named by URL arg ``arg``."""
    def decorator(view):
        @wraps(view)
        @jwt_required()
        def wrapper(*args, **kwargs):
            entity_id = kwargs.pop(arg)
            kwargs[kind] = authorize(kind, entity_id, get_jwt_identity())
            return view(*args, **kwargs)
        return wrapper
    return decorator


def body():
    return request.get_json(silent=True)


def respond(endpoint, payload=None, status=200):
    """Check the payload against the contract for ``status`` and send it."""
    endpoint.parse_response(status, payload)
    if payload is None:
        return '', status
    return jsonify(payload), status


def register_jwt_handlers(jwt):
    """Missing, invalid or expired sessions all answer 401 {"message": "Unauthorized"}."""

    def _unauthorized(*_args):
        return jsonify({'message': 'Unauthorized'}), 401

    jwt.unauthorized_loader(_unauthorized)
    jwt.invalid_token_loader(_unauthorized)
    jwt.expired_token_loader(_unauthorized)
    jwt.revoked_token_loader(_unauthorized)
    jwt.needs_fresh_token_loader(_unauthorized)
