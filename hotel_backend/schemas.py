"""Request schemas for rooms and offers.

Both stores rely on these for field constraints, so the file store enforces
the same ranges and closed sets as the SQL tables.
"""
from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from hotel_backend.errors import ValidationFailed

RoomType = Literal['Single', 'Double', 'Twin', 'Suite', 'Deluxe']
OfferType = Literal['percentage', 'fixed']


class RequestSchema(BaseModel):
    # Python's json module accepts Infinity and NaN, which we could never serialize back
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)


class RegisterRequest(RequestSchema):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginRequest(RequestSchema):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RoomCreate(RequestSchema):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    type: RoomType
    price: float = Field(ge=0)
    capacity: int = Field(ge=1, le=10)
    amenities: list[str] = []
    images: list[str] = []
    available: bool = True
    rating: float = Field(default=4.5, ge=0, le=5)
    reviews: int = Field(default=0, ge=0)


class RoomUpdate(RequestSchema):
    # Unset fields stay out of the update; an explicit null fails validation.
    name: str = Field(default=None, min_length=1)
    description: str = Field(default=None, min_length=1)
    type: RoomType = None
    price: float = Field(default=None, ge=0)
    capacity: int = Field(default=None, ge=1, le=10)
    amenities: list[str] = None
    images: list[str] = None
    available: bool = None
    rating: float = Field(default=None, ge=0, le=5)
    reviews: int = Field(default=None, ge=0)


class OfferFields(RequestSchema):
    @field_validator('valid_from', 'valid_until', check_fields=False)
    @classmethod
    def to_naive_utc(cls, value):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @field_validator('code', check_fields=False)
    @classmethod
    def blank_code_is_none(cls, value):
        if value is not None:
            value = value.strip() or None
        return value


class OfferCreate(OfferFields):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    discount: float = Field(ge=0, le=100)
    offer_type: OfferType = 'percentage'
    applicable_room_types: list[RoomType] = []
    valid_from: datetime
    valid_until: datetime
    image: Optional[str] = None
    code: Optional[str] = None
    active: bool = True


class OfferUpdate(OfferFields):
    title: str = Field(default=None, min_length=1)
    description: str = Field(default=None, min_length=1)
    discount: float = Field(default=None, ge=0, le=100)
    offer_type: OfferType = None
    applicable_room_types: list[RoomType] = None
    valid_from: datetime = None
    valid_until: datetime = None
    image: Optional[str] = None
    code: Optional[str] = None
    active: bool = None


def _describe(error):
    return {
        'field': '.'.join(str(part) for part in error['loc']),
        'message': error['msg'],
    }


def parse(schema, payload, partial=False):
    """Validate ``payload`` and return it as a record dict with camelCase keys.

    With ``partial`` only the fields present in the payload are returned.
    """
    try:
        parsed = schema.model_validate(payload)
    except ValidationError as exc:
        raise ValidationFailed('Validation failed', errors=[_describe(e) for e in exc.errors()]) from exc
    return parsed.model_dump(by_alias=True, exclude_unset=partial)
