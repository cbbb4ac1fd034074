from farmtrack.database.db import db
from datetime import datetime, timezone


def utcnow():
    """Naive UTC timestamp; all datetimes are stored without tzinfo."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def iso(value):
    return value.isoformat() + 'Z' if value else None


# ============================================================================
# 🔹 DOMAIN 1: USER DOMAIN
# ============================================================================

class User(db.Model):
    """Login + identity. The id is the opaque owner identifier stamped on farms."""
    __tablename__ = 'users'

    id = db.Column(db.String(36), primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    name = db.Column(db.String(100))
    created_at = db.Column(db.DateTime, default=utcnow)

    farms = db.relationship('Farm', backref='owner', lazy=True)

    def to_dict(self):
        return {
            'id': self.id, 'username': self.username, 'name': self.name,
            'createdAt': iso(self.created_at),
        }


# ============================================================================
# 🔹 DOMAIN 2: FARM DOMAIN
# ============================================================================

class Farm(db.Model):
    """Root of the ownership hierarchy. One user → many farms."""
    __tablename__ = 'farms'
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    name = db.Column(db.Text, nullable=False)
    location = db.Column(db.Text, nullable=False)
    size = db.Column(db.Float, nullable=False)
    size_unit = db.Column(db.Text, nullable=False, default='acres')
    created_at = db.Column(db.DateTime, default=utcnow)

    # No FK and no cascade: fields outlive a deleted farm
    fields = db.relationship('Field', backref='farm', lazy=True, order_by='Field.id',
                             primaryjoin='Farm.id == foreign(Field.farm_id)',
                             passive_deletes='all')

    def to_dict(self, include_fields=False):
        data = {
            'id': self.id, 'userId': self.user_id,
            'name': self.name, 'location': self.location,
            'size': self.size, 'sizeUnit': self.size_unit,
            'createdAt': iso(self.created_at),
        }
        if include_fields:
            data['fields'] = [f.to_dict() for f in self.fields]
        return data


class Field(db.Model):
    """A subdivision of a farm with its own area and soil type."""
    __tablename__ = 'fields'
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    farm_id = db.Column(db.Integer, nullable=False, index=True)
    # owner at creation time; answers ownership once the farm is gone
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    name = db.Column(db.Text, nullable=False)
    area = db.Column(db.Float, nullable=False)
    soil_type = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    crops = db.relationship('Crop', backref='field', lazy=True, cascade='all, delete-orphan')
    activities = db.relationship('Activity', backref='field', lazy=True, cascade='all, delete-orphan')
    advisories = db.relationship('Advisory', backref='field', lazy=True, cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id, 'farmId': self.farm_id,
            'name': self.name, 'area': self.area, 'soilType': self.soil_type,
            'createdAt': iso(self.created_at),
        }


# ============================================================================
# 🔹 DOMAIN 3: CROP DOMAIN
# ============================================================================

class Crop(db.Model):
    """A planting cycle on one field. Status is free text at this layer."""
    __tablename__ = 'crops'
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    field_id = db.Column(db.Integer, db.ForeignKey('fields.id'), nullable=False, index=True)
    name = db.Column(db.Text, nullable=False)
    variety = db.Column(db.Text)
    sowing_date = db.Column(db.DateTime, nullable=False)
    expected_harvest_date = db.Column(db.DateTime)
    actual_harvest_date = db.Column(db.DateTime)
    status = db.Column(db.Text, nullable=False, default='active')  # active, harvested, failed
    yield_amount = db.Column(db.Float)        # filled on harvest
    yield_unit = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=utcnow)

    advisories = db.relationship('Advisory', backref='crop', lazy=True, cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id, 'fieldId': self.field_id,
            'name': self.name, 'variety': self.variety,
            'sowingDate': iso(self.sowing_date),
            'expectedHarvestDate': iso(self.expected_harvest_date),
            'actualHarvestDate': iso(self.actual_harvest_date),
            'status': self.status,
            'yieldAmount': self.yield_amount, 'yieldUnit': self.yield_unit,
            'createdAt': iso(self.created_at),
        }


# ============================================================================
# 🔹 DOMAIN 4: OPERATIONS DOMAIN
# ============================================================================

class Activity(db.Model):
    """Append-only log of field operations, optionally tied to a crop cycle."""
    __tablename__ = 'activities'
    __table_args__ = (
        db.Index('idx_activity_field_date', 'field_id', 'date'),
        {'sqlite_autoincrement': True},
    )

    id = db.Column(db.Integer, primary_key=True)
    field_id = db.Column(db.Integer, db.ForeignKey('fields.id'), nullable=False)
    crop_id = db.Column(db.Integer, db.ForeignKey('crops.id'), index=True)
    type = db.Column(db.Text, nullable=False)  # sowing, irrigation, fertilization, harvesting, scouting, other
    date = db.Column(db.DateTime, nullable=False)
    notes = db.Column(db.Text)
    details = db.Column(db.JSON)               # { amount: 10, unit: "kg", product: "Urea" }
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id, 'fieldId': self.field_id, 'cropId': self.crop_id,
            'type': self.type, 'date': iso(self.date),
            'notes': self.notes, 'details': self.details,
            'createdAt': iso(self.created_at),
        }


# ============================================================================
# 🔹 DOMAIN 5: ADVISORY DOMAIN
# ============================================================================

class Advisory(db.Model):
    """Generated advice text. Append-only; user_id keeps unscoped advice tenant-bound."""
    __tablename__ = 'advisories'
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    field_id = db.Column(db.Integer, db.ForeignKey('fields.id'))
    crop_id = db.Column(db.Integer, db.ForeignKey('crops.id'))
    title = db.Column(db.Text, nullable=False)
    content = db.Column(db.Text, nullable=False)
    generated_at = db.Column(db.DateTime, default=utcnow, index=True)
    is_read = db.Column(db.Boolean, default=False)

    def to_dict(self):
        return {
            'id': self.id, 'userId': self.user_id,
            'fieldId': self.field_id, 'cropId': self.crop_id,
            'title': self.title, 'content': self.content,
            'generatedAt': iso(self.generated_at),
            'isRead': bool(self.is_read),
        }
