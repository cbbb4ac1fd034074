"""
Farm Routes

GET    /api/farms          — List the caller's farms (seeds a sample farm on first use)
POST   /api/farms          — Create a farm
GET    /api/farms/<id>     — Farm with its fields
PUT    /api/farms/<id>     — Partial update
DELETE /api/farms/<id>     — Delete the farm (its fields are kept)
"""

from flask import Blueprint, current_app
from flask_jwt_extended import jwt_required

from farmtrack.contract import api
from farmtrack.routes.guards import body, caller_id, owned, respond
from farmtrack.services.farm_service import FarmService
from farmtrack.services.seed_service import SeedService

farm_bp = Blueprint('farm_bp', __name__)


@farm_bp.route(api.farms.list.rule, methods=[api.farms.list.method])
@jwt_required()
def list_farms():
    user_id = caller_id()
    if current_app.config.get('SEED_NEW_USERS'):
        SeedService.seed_if_empty(user_id)
    farms = FarmService.list_farms(user_id)
    return respond(api.farms.list, [f.to_dict() for f in farms])


@farm_bp.route(api.farms.create.rule, methods=[api.farms.create.method])
@jwt_required()
def create_farm():
    data = api.farms.create.parse_input(body())
    farm = FarmService.create_farm(caller_id(), data.model_dump())
    return respond(api.farms.create, farm.to_dict(), 201)


@farm_bp.route(api.farms.get.rule, methods=[api.farms.get.method])
@owned('farm')
def get_farm(farm):
    return respond(api.farms.get, farm.to_dict(include_fields=True))


@farm_bp.route(api.farms.update.rule, methods=[api.farms.update.method])
@owned('farm')
def update_farm(farm):
    changes = api.farms.update.parse_input(body()).changes()
    updated = FarmService.update_farm(farm.id, changes)
    return respond(api.farms.update, updated.to_dict())


@farm_bp.route(api.farms.delete.rule, methods=[api.farms.delete.method])
@owned('farm')
def delete_farm(farm):
    FarmService.delete_farm(farm.id)
    return respond(api.farms.delete, None, 204)
