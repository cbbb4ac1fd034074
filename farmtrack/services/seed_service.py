"""
Sample farm for first-time users.

The first time a user with no farms lists them, one demo farm is created
with two fields, two crops and two activities. Everything is written in a
single transaction: either the whole sample lands or none of it does.
"""

import logging
from datetime import datetime

from farmtrack.database.db import db
from farmtrack.services.activity_service import ActivityService
from farmtrack.services.farm_service import CropService, FarmService, FieldService

logger = logging.getLogger('farmtrack.seed')

SAMPLE_FARM = {
    'name': 'Green Valley Farm',
    'location': 'California, USA',
    'size': 150,
    'size_unit': 'acres',
}

SAMPLE_FIELDS = [
    {'name': 'North Field', 'area': 50, 'soil_type': 'Loam'},
    {'name': 'South Pasture', 'area': 100, 'soil_type': 'Clay'},
]


class SeedService:

    @staticmethod
    def seed_if_empty(user_id):
        """Seed the sample farm only when the user owns no farms. Returns True if seeded."""
        if FarmService.count_farms(user_id) > 0:
            return False
        SeedService.seed_sample_farm(user_id)
        return True

    @staticmethod
    def seed_sample_farm(user_id):
        logger.info("Seeding sample farm for new user", extra={'extra_data': {'user_id': user_id}})
        try:
            farm = FarmService.create_farm(user_id, SAMPLE_FARM, commit=False)
            north, south = [
                FieldService.create_field(farm, data, commit=False)
                for data in SAMPLE_FIELDS
            ]

            CropService.create_crop(north.id, {
                'name': 'Corn',
                'variety': 'Golden Harvest',
                'sowing_date': datetime(2024, 4, 15),
                'status': 'active',
            }, commit=False)
            CropService.create_crop(south.id, {
                'name': 'Wheat',
                'variety': 'Winter Red',
                'sowing_date': datetime(2023, 11, 10),
                'status': 'harvested',
                'actual_harvest_date': datetime(2024, 6, 20),
                'yield_amount': 4.5,
                'yield_unit': 'tons/acre',
            }, commit=False)

            ActivityService.create_activity({
                'field_id': north.id,
                'type': 'sowing',
                'date': datetime(2024, 4, 15),
                'notes': 'Sowed corn seeds under optimal conditions.',
            }, commit=False)
            ActivityService.create_activity({
                'field_id': north.id,
                'type': 'irrigation',
                'date': datetime(2024, 5, 1),
                'notes': 'Drip irrigation applied.',
            }, commit=False)

            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.exception("Sample farm seeding failed, rolled back")
            raise
        return farm
