from farmtrack.database.db import db
from farmtrack.database.models import Farm, Field, Crop


class FarmService:
    # ──────────────────────────────────────────
    # FARM CRUD
    # ──────────────────────────────────────────

    @staticmethod
    def list_farms(user_id):
        return Farm.query.filter_by(user_id=user_id).order_by(Farm.id).all()

    @staticmethod
    def count_farms(user_id):
        return Farm.query.filter_by(user_id=user_id).count()

    @staticmethod
    def create_farm(user_id, data, commit=True):
        """Create a new farm owned by ``user_id``."""
        farm = Farm(
            user_id=user_id,
            name=data['name'],
            location=data['location'],
            size=data['size'],
            size_unit=data.get('size_unit') or 'acres',
        )
        db.session.add(farm)
        if commit:
            db.session.commit()
        else:
            db.session.flush()
        return farm

    @staticmethod
    def update_farm(farm_id, data):
        farm = db.session.get(Farm, farm_id)
        if not farm:
            return None

        updatable = ['name', 'location', 'size', 'size_unit']
        for field in updatable:
            if field in data:
                setattr(farm, field, data[field])

        db.session.commit()
        return farm

    @staticmethod
    def delete_farm(farm_id):
        """Delete the farm row only. Its fields stay behind, still owned by the same user."""
        farm = db.session.get(Farm, farm_id)
        if not farm:
            return False
        try:
            db.session.delete(farm)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return True


class FieldService:

    @staticmethod
    def list_fields(farm_id):
        return Field.query.filter_by(farm_id=farm_id).order_by(Field.id).all()

    @staticmethod
    def create_field(farm, data, commit=True):
        field = Field(
            farm_id=farm.id,
            user_id=farm.user_id,
            name=data['name'],
            area=data['area'],
            soil_type=data['soil_type'],
        )
        db.session.add(field)
        if commit:
            db.session.commit()
        else:
            db.session.flush()
        return field

    @staticmethod
    def update_field(field_id, data):
        field = db.session.get(Field, field_id)
        if not field:
            return None

        for name in ['name', 'area', 'soil_type']:
            if name in data:
                setattr(field, name, data[name])

        db.session.commit()
        return field

    @staticmethod
    def delete_field(field_id):
        """Delete a field with its crops, activities and advisories."""
        field = db.session.get(Field, field_id)
        if not field:
            return False
        try:
            db.session.delete(field)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return True


class CropService:

    @staticmethod
    def list_crops(field_id):
        return Crop.query.filter_by(field_id=field_id).order_by(Crop.id).all()

    @staticmethod
    def create_crop(field_id, data, commit=True):
        crop = Crop(
            field_id=field_id,
            name=data['name'],
            variety=data.get('variety'),
            sowing_date=data['sowing_date'],
            expected_harvest_date=data.get('expected_harvest_date'),
            actual_harvest_date=data.get('actual_harvest_date'),
            status=data.get('status') or 'active',
            yield_amount=data.get('yield_amount'),
            yield_unit=data.get('yield_unit'),
        )
        db.session.add(crop)
        if commit:
            db.session.commit()
        else:
            db.session.flush()
        return crop

    @staticmethod
    def update_crop(crop_id, data):
        crop = db.session.get(Crop, crop_id)
        if not crop:
            return None

        updatable = [
            'name', 'variety', 'sowing_date', 'expected_harvest_date',
            'actual_harvest_date', 'status', 'yield_amount', 'yield_unit',
        ]
        for field in updatable:
            if field in data:
                setattr(crop, field, data[field])

        db.session.commit()
        return crop
