"""
Session Routes

POST /api/register    — Create an account and start a session
POST /api/login       — Start a session
POST /api/logout      — Clear the session cookie
GET  /api/auth/user   — The signed-in user
"""

from flask import Blueprint, jsonify
from flask_jwt_extended import (
    create_access_token, jwt_required, set_access_cookies, unset_jwt_cookies,
)

from farmtrack.contract import api
from farmtrack.errors import Unauthorized
from farmtrack.routes.guards import body, caller_id, respond
from farmtrack.services.user_service import UserService

auth_bp = Blueprint('auth_bp', __name__)


def _session_response(endpoint, user, status):
    token = create_access_token(identity=user.id)
    payload = {'user': user.to_dict(), 'token': token}
    endpoint.parse_response(status, payload)

    response = jsonify(payload)
    set_access_cookies(response, token)
    return response, status


@auth_bp.route(api.auth.register.rule, methods=[api.auth.register.method])
def register():
    data = api.auth.register.parse_input(body())
    user = UserService.register(data.username, data.password, data.name)
    return _session_response(api.auth.register, user, 201)


@auth_bp.route(api.auth.login.rule, methods=[api.auth.login.method])
def login():
    data = api.auth.login.parse_input(body())
    user = UserService.authenticate(data.username, data.password)
    if not user:
        raise Unauthorized('Invalid username or password')
    return _session_response(api.auth.login, user, 200)


@auth_bp.route(api.auth.logout.rule, methods=[api.auth.logout.method])
def logout():
    payload = {'message': 'Logged out'}
    api.auth.logout.parse_response(200, payload)
    response = jsonify(payload)
    unset_jwt_cookies(response)
    return response, 200


@auth_bp.route(api.auth.user.rule, methods=[api.auth.user.method])
@jwt_required()
def current_user():
    user = UserService.get_user(caller_id())
    if not user:
        raise Unauthorized()
    return respond(api.auth.user, user.to_dict())
