# hotel_backend/models.py
from hotel_backend import db
from hotel_backend.store.base import new_id, utcnow
from hotel_backend.store.query import to_field

ROOM_TYPES = ('Single', 'Double', 'Twin', 'Suite', 'Deluxe')
OFFER_TYPES = ('percentage', 'fixed')


class SerializerMixin:
    def to_dict(self):
        return {to_field(column.key): getattr(self, column.key) for column in self.__table__.columns}


class User(SerializerMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.String(100), nullable=False)  # bcrypt hash
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)


class Room(SerializerMixin, db.Model):
    __tablename__ = 'rooms'

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, nullable=False)
    type = db.Column(db.Enum(*ROOM_TYPES, name='room_type'), nullable=False)
    price = db.Column(db.Float, nullable=False)
    capacity = db.Column(db.Integer, nullable=False)
    amenities = db.Column(db.JSON, nullable=False, default=list)
    images = db.Column(db.JSON, nullable=False, default=list)
    available = db.Column(db.Boolean, nullable=False, default=True)
    rating = db.Column(db.Float, nullable=False, default=4.5)
    reviews = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        db.CheckConstraint('capacity BETWEEN 1 AND 10', name='room_capacity_range'),
        db.CheckConstraint('rating BETWEEN 0 AND 5', name='room_rating_range'),
    )


class Offer(SerializerMixin, db.Model):
    __tablename__ = 'offers'

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    title = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, nullable=False)
    discount = db.Column(db.Float, nullable=False)
    offer_type = db.Column(db.Enum(*OFFER_TYPES, name='offer_type'), nullable=False, default='percentage')
    applicable_room_types = db.Column(db.JSON, nullable=False, default=list)
    valid_from = db.Column(db.DateTime, nullable=False)
    valid_until = db.Column(db.DateTime, nullable=False)
    image = db.Column(db.String(500))
    code = db.Column(db.String(50), unique=True)  # NULLs never collide, so codes are optional
    active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        db.CheckConstraint('discount BETWEEN 0 AND 100', name='offer_discount_range'),
    )
