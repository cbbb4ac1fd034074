"""
Activity Routes (append-only)

GET  /api/activities?fieldId=&cropId=   — Caller's activities, newest first
POST /api/activities                    — Log an activity on a field
"""

from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from farmtrack.contract import api
from farmtrack.errors import ValidationFailed
from farmtrack.routes.guards import body, caller_id, respond
from farmtrack.services.activity_service import ActivityService
from farmtrack.services.ownership import authorize

activity_bp = Blueprint('activity_bp', __name__)


@activity_bp.route(api.activities.list.rule, methods=[api.activities.list.method])
@jwt_required()
def list_activities():
    user_id = caller_id()
    filters = api.activities.list.parse_input(request.args.to_dict())
    if filters.field_id is not None:
        authorize('field', filters.field_id, user_id)
    if filters.crop_id is not None:
        authorize('crop', filters.crop_id, user_id)

    activities = ActivityService.list_activities(user_id, filters.field_id, filters.crop_id)
    return respond(api.activities.list, [a.to_dict() for a in activities])


@activity_bp.route(api.activities.create.rule, methods=[api.activities.create.method])
@jwt_required()
def create_activity():
    user_id = caller_id()
    data = api.activities.create.parse_input(body())

    field = authorize('field', data.field_id, user_id)
    if data.crop_id is not None:
        crop = authorize('crop', data.crop_id, user_id)
        if crop.field_id != field.id:
            raise ValidationFailed('cropId does not belong to the given fieldId', field='cropId')

    activity = ActivityService.create_activity(data.model_dump())
    return respond(api.activities.create, activity.to_dict(), 201)
