from farmtrack.database.db import db
from farmtrack.database.models import Activity, Field


def owned_field_ids(user_id):
    """Sub-select of every field the user owns, including fields of deleted farms."""
    return db.select(Field.id).where(Field.user_id == user_id)


class ActivityService:

    @staticmethod
    def list_activities(user_id, field_id=None, crop_id=None):
        """Activities under the user's farms, newest first, optionally filtered."""
        query = Activity.query.filter(Activity.field_id.in_(owned_field_ids(user_id)))
        if field_id is not None:
            query = query.filter(Activity.field_id == field_id)
        if crop_id is not None:
            query = query.filter(Activity.crop_id == crop_id)
        return query.order_by(Activity.date.desc(), Activity.id.desc()).all()

    @staticmethod
    def create_activity(data, commit=True):
        activity = Activity(
            field_id=data['field_id'],
            crop_id=data.get('crop_id'),
            type=data['type'],
            date=data['date'],
            notes=data.get('notes'),
            details=data.get('details'),
        )
        db.session.add(activity)
        if commit:
            db.session.commit()
        else:
            db.session.flush()
        return activity
