"""
Wire schemas shared by the API server and the contract client.

Keys travel camelCase on the wire; python code uses the snake_case
attribute names (``populate_by_name``). Request models validate input,
response models describe what each endpoint returns.
"""

from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator
from pydantic.alias_generators import to_camel

CropStatus = Literal['active', 'harvested', 'failed']
ActivityType = Literal['sowing', 'irrigation', 'fertilization', 'harvesting', 'scouting', 'other']

# Activity.details values: string keys, scalar values only
Scalar = Union[StrictBool, int, float, str, None]

CROP_STATUSES = ('active', 'harvested', 'failed')
ACTIVITY_TYPES = ('sowing', 'irrigation', 'fertilization', 'harvesting', 'scouting', 'other')


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def to_naive_utc(value):
    if value is not None and value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class PartialUpdate(WireModel):
    """Every field optional; explicit nulls rejected for NOT NULL columns."""
    NON_NULLABLE: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode='after')
    def _reject_nulls(self):
        for name in self.NON_NULLABLE:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f'{to_camel(name)} may not be null')
        return self

    def changes(self):
        return self.model_dump(exclude_unset=True)


# ──────────────────────────────────────────
# AUTH
# ──────────────────────────────────────────

class RegisterInput(WireModel):
    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=6, max_length=128)
    name: Optional[str] = Field(None, max_length=100)


class LoginInput(WireModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


# ──────────────────────────────────────────
# FARMS / FIELDS
# ──────────────────────────────────────────

class FarmCreate(WireModel):
    name: str = Field(min_length=1)
    location: str = Field(min_length=1)
    size: float = Field(gt=0)
    size_unit: str = Field('acres', min_length=1)


class FarmUpdate(PartialUpdate):
    NON_NULLABLE: ClassVar[Tuple[str, ...]] = ('name', 'location', 'size', 'size_unit')

    name: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    size: Optional[float] = Field(None, gt=0)
    size_unit: Optional[str] = Field(None, min_length=1)


class FieldCreate(WireModel):
    name: str = Field(min_length=1)
    area: float = Field(gt=0)
    soil_type: str = Field(min_length=1)


class FieldUpdate(PartialUpdate):
    NON_NULLABLE: ClassVar[Tuple[str, ...]] = ('name', 'area', 'soil_type')

    name: Optional[str] = Field(None, min_length=1)
    area: Optional[float] = Field(None, gt=0)
    soil_type: Optional[str] = Field(None, min_length=1)


# ──────────────────────────────────────────
# CROPS
# ──────────────────────────────────────────

class CropCreate(WireModel):
    name: str = Field(min_length=1)
    variety: Optional[str] = None
    sowing_date: datetime
    expected_harvest_date: Optional[datetime] = None
    actual_harvest_date: Optional[datetime] = None
    status: CropStatus = 'active'
    yield_amount: Optional[float] = Field(None, ge=0)
    yield_unit: Optional[str] = None

    @field_validator('sowing_date', 'expected_harvest_date', 'actual_harvest_date')
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)

    @model_validator(mode='after')
    def _yield_only_when_harvested(self):
        if self.yield_amount is not None and self.status != 'harvested':
            raise ValueError('yieldAmount can only be recorded for a harvested crop')
        return self


class CropUpdate(PartialUpdate):
    NON_NULLABLE: ClassVar[Tuple[str, ...]] = ('name', 'sowing_date', 'status')

    name: Optional[str] = Field(None, min_length=1)
    variety: Optional[str] = None
    sowing_date: Optional[datetime] = None
    expected_harvest_date: Optional[datetime] = None
    actual_harvest_date: Optional[datetime] = None
    status: Optional[CropStatus] = None
    yield_amount: Optional[float] = Field(None, ge=0)
    yield_unit: Optional[str] = None

    @field_validator('sowing_date', 'expected_harvest_date', 'actual_harvest_date')
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)


# ──────────────────────────────────────────
# ACTIVITIES / ADVISORIES
# ──────────────────────────────────────────

class ActivityCreate(WireModel):
    field_id: int
    crop_id: Optional[int] = None
    type: ActivityType
    date: datetime
    notes: Optional[str] = None
    details: Optional[Dict[str, Scalar]] = None

    @field_validator('date')
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)


class ActivityFilters(WireModel):
    field_id: Optional[int] = None
    crop_id: Optional[int] = None


class AdvisoryFilters(WireModel):
    field_id: Optional[int] = None
    crop_id: Optional[int] = None


class AdvisoryGenerate(WireModel):
    field_id: Optional[int] = None
    crop_id: Optional[int] = None
    context: Optional[str] = Field(None, max_length=4000)


# ──────────────────────────────────────────
# RESPONSES
# ──────────────────────────────────────────

class ErrorOut(WireModel):
    message: str
    field: Optional[str] = None


class MessageOut(WireModel):
    message: str


class UserOut(WireModel):
    id: str
    username: str
    name: Optional[str] = None
    created_at: Optional[datetime] = None


class AuthOut(WireModel):
    user: UserOut
    token: str


class FarmOut(WireModel):
    id: int
    user_id: str
    name: str
    location: str
    size: float
    size_unit: str
    created_at: Optional[datetime] = None


class FieldOut(WireModel):
    id: int
    farm_id: int
    name: str
    area: float
    soil_type: str
    created_at: Optional[datetime] = None


class FarmDetailOut(FarmOut):
    fields: List[FieldOut]


class CropOut(WireModel):
    id: int
    field_id: int
    name: str
    variety: Optional[str] = None
    sowing_date: datetime
    expected_harvest_date: Optional[datetime] = None
    actual_harvest_date: Optional[datetime] = None
    status: str
    yield_amount: Optional[float] = None
    yield_unit: Optional[str] = None
    created_at: Optional[datetime] = None


class ActivityOut(WireModel):
    id: int
    field_id: int
    crop_id: Optional[int] = None
    type: str
    date: datetime
    notes: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None


class AdvisoryOut(WireModel):
    id: int
    user_id: str
    field_id: Optional[int] = None
    crop_id: Optional[int] = None
    title: str
    content: str
    generated_at: Optional[datetime] = None
    is_read: bool
