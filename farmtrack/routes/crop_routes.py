"""
Crop Routes

GET  /api/fields/<fieldId>/crops   — Crop cycles on a field
POST /api/fields/<fieldId>/crops   — Start a crop cycle
GET  /api/crops/<id>               — One crop
PUT  /api/crops/<id>               — Partial update (e.g. record a harvest)
"""

from flask import Blueprint

from farmtrack.contract import api
from farmtrack.errors import ValidationFailed
from farmtrack.routes.guards import body, owned, respond
from farmtrack.services.farm_service import CropService

crop_bp = Blueprint('crop_bp', __name__)


@crop_bp.route(api.crops.list.rule, methods=[api.crops.list.method])
@owned('field', arg='fieldId')
def list_crops(field):
    crops = CropService.list_crops(field.id)
    return respond(api.crops.list, [c.to_dict() for c in crops])


@crop_bp.route(api.crops.create.rule, methods=[api.crops.create.method])
@owned('field', arg='fieldId')
def create_crop(field):
    data = api.crops.create.parse_input(body())
    crop = CropService.create_crop(field.id, data.model_dump())
    return respond(api.crops.create, crop.to_dict(), 201)


@crop_bp.route(api.crops.get.rule, methods=[api.crops.get.method])
@owned('crop')
def get_crop(crop):
    return respond(api.crops.get, crop.to_dict())


@crop_bp.route(api.crops.update.rule, methods=[api.crops.update.method])
@owned('crop')
def update_crop(crop):
    changes = api.crops.update.parse_input(body()).changes()

    # yield needs a harvested crop; check against the merged row
    status = changes.get('status', crop.status)
    yield_amount = changes.get('yield_amount', crop.yield_amount)
    if yield_amount is not None and status != 'harvested':
        raise ValidationFailed('yieldAmount can only be recorded for a harvested crop', field='yieldAmount')

    updated = CropService.update_crop(crop.id, changes)
    return respond(api.crops.update, updated.to_dict())
