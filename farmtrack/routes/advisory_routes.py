"""
Advisory Routes

GET  /api/advisories             — Caller's advisories, newest first
POST /api/advisories/generate    — Ask the LLM for advice and store it
"""

import logging

from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from farmtrack.contract import api
from farmtrack.errors import ApiError, ValidationFailed
from farmtrack.routes.guards import body, caller_id, respond
from farmtrack.services.advisory_service import AdvisoryGenerationError, AdvisoryService
from farmtrack.services.ownership import authorize

logger = logging.getLogger('farmtrack.advisory')

advisory_bp = Blueprint('advisory_bp', __name__)


@advisory_bp.route(api.advisories.list.rule, methods=[api.advisories.list.method])
@jwt_required()
def list_advisories():
    user_id = caller_id()
    filters = api.advisories.list.parse_input(request.args.to_dict())
    if filters.field_id is not None:
        authorize('field', filters.field_id, user_id)
    if filters.crop_id is not None:
        authorize('crop', filters.crop_id, user_id)

    advisories = AdvisoryService.list_advisories(user_id, filters.field_id, filters.crop_id)
    return respond(api.advisories.list, [a.to_dict() for a in advisories])


@advisory_bp.route(api.advisories.generate.rule, methods=[api.advisories.generate.method])
@jwt_required()
def generate_advisory():
    user_id = caller_id()
    data = api.advisories.generate.parse_input(body())

    if data.field_id is not None:
        authorize('field', data.field_id, user_id)
    if data.crop_id is not None:
        crop = authorize('crop', data.crop_id, user_id)
        if data.field_id is not None and crop.field_id != data.field_id:
            raise ValidationFailed('cropId does not belong to the given fieldId', field='cropId')

    try:
        advisory = AdvisoryService.generate(user_id, data.field_id, data.crop_id, data.context)
    except AdvisoryGenerationError as e:
        logger.error(
            f"Advisory generation failed: {e}",
            extra={'extra_data': {'type': 'advisory_error', 'user_id': user_id}},
        )
        raise ApiError('Failed to generate advisory') from e

    return respond(api.advisories.generate, advisory.to_dict(), 201)
