"""
Field Routes

GET    /api/farms/<farmId>/fields   — Fields of a farm
POST   /api/farms/<farmId>/fields   — Add a field to a farm
GET    /api/fields/<id>             — One field
PUT    /api/fields/<id>             — Partial update
DELETE /api/fields/<id>             — Delete field with its crops and activities
"""

from flask import Blueprint

from farmtrack.contract import api
from farmtrack.routes.guards import body, owned, respond
from farmtrack.services.farm_service import FieldService

field_bp = Blueprint('field_bp', __name__)


@field_bp.route(api.fields.list.rule, methods=[api.fields.list.method])
@owned('farm', arg='farmId')
def list_fields(farm):
    fields = FieldService.list_fields(farm.id)
    return respond(api.fields.list, [f.to_dict() for f in fields])


@field_bp.route(api.fields.create.rule, methods=[api.fields.create.method])
@owned('farm', arg='farmId')
def create_field(farm):
    data = api.fields.create.parse_input(body())
    field = FieldService.create_field(farm, data.model_dump())
    return respond(api.fields.create, field.to_dict(), 201)


@field_bp.route(api.fields.get.rule, methods=[api.fields.get.method])
@owned('field')
def get_field(field):
    return respond(api.fields.get, field.to_dict())


@field_bp.route(api.fields.update.rule, methods=[api.fields.update.method])
@owned('field')
def update_field(field):
    changes = api.fields.update.parse_input(body()).changes()
    updated = FieldService.update_field(field.id, changes)
    return respond(api.fields.update, updated.to_dict())


@field_bp.route(api.fields.delete.rule, methods=[api.fields.delete.method])
@owned('field')
def delete_field(field):
    FieldService.delete_field(field.id)
    return respond(api.fields.delete, None, 204)
