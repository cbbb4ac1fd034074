"""
Ownership Gate — proves the caller owns the root Farm of any scoped entity.

Ownership chain:  Crop → Field → Farm → user
                  Activities are checked through the field (and crop) they name.

A Field also records its owner when created, so it stays reachable by
that user after its Farm has been deleted.

Existence is checked before ownership, so a missing entity is always a
404 and never reveals who owns what.
"""

from flask import current_app

from farmtrack.database.db import db
from farmtrack.database.models import Crop, Farm, Field
from farmtrack.errors import Forbidden, NotFound

KINDS = {
    'farm': (Farm, 'Farm'),
    'field': (Field, 'Field'),
    'crop': (Crop, 'Crop'),
}


def load(kind, entity_id):
    model, label = KINDS[kind]
    entity = db.session.get(model, entity_id)
    if entity is None:
        raise NotFound(f'{label} not found')
    return entity


def owner_of(entity):
    """Walk parent references up to the farm owner; None if the chain is broken."""
    if isinstance(entity, Crop):
        entity = db.session.get(Field, entity.field_id)
        if entity is None:
            return None
    if isinstance(entity, Field):
        farm = db.session.get(Farm, entity.farm_id)
        if farm is None:
            # orphaned by a farm delete
            return entity.user_id
        entity = farm
    return entity.user_id


def authorize(kind, entity_id, user_id):
    """Load ``kind``/``entity_id`` and return it if ``user_id`` owns it."""
    entity = load(kind, entity_id)
    owner = owner_of(entity)
    if owner is None:
        # crop whose field is gone: nobody can prove ownership
        raise NotFound(f'{KINDS[kind][1]} not found')
    if owner != user_id:
        status = current_app.config.get('OWNERSHIP_DENIED_STATUS', 401)
        raise Forbidden('Forbidden' if status == 403 else 'Unauthorized', status_code=status)
    return entity
