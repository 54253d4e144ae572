from sqlalchemy.exc import IntegrityError

from hotel_backend import db
from hotel_backend.models import Offer, Room, User
from hotel_backend.store.base import Collection, ConstraintViolation, Store
from hotel_backend.store.query import conditions, to_attribute


class SqlCollection(Collection):
    def __init__(self, name, model):
        self.name = name
        self.model = model

    def _select(self, query):
        stmt = db.select(self.model)
        for field, compare, operand in conditions(query):
            column = getattr(self.model, to_attribute(field))
            stmt = stmt.where(compare(column, operand))
        return stmt.order_by(self.model.created_at, self.model.id)

    def _assign(self, instance, data):
        for field, value in data.items():
            attribute = to_attribute(field)
            if attribute == 'id':
                continue
            setattr(instance, attribute, value)

    def _commit(self):
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            raise ConstraintViolation(self.name, detail=str(exc.orig)) from exc

    def find_one(self, query):
        return self._to_record(db.session.scalars(self._select(query).limit(1)).first())

    def find(self, query=None):
        return [instance.to_dict() for instance in db.session.scalars(self._select(query))]

    def find_by_id(self, record_id):
        return self._to_record(db.session.get(self.model, record_id))

    def create(self, data):
        instance = self.model()
        self._assign(instance, data)
        db.session.add(instance)
        self._commit()
        return instance.to_dict()

    def insert_many(self, records):
        instances = []
        for data in records:
            instance = self.model()
            self._assign(instance, data)
            instances.append(instance)
        db.session.add_all(instances)
        self._commit()
        return [instance.to_dict() for instance in instances]

    def update_by_id(self, record_id, changes):
        instance = db.session.get(self.model, record_id)
        if instance is None:
            return None
        self._assign(instance, changes)
        self._commit()
        return instance.to_dict()

    def delete_by_id(self, record_id):
        instance = db.session.get(self.model, record_id)
        if instance is None:
            return None
        record = instance.to_dict()
        db.session.delete(instance)
        self._commit()
        return record

    def delete_many(self, query=None):
        instances = db.session.scalars(self._select(query)).all()
        for instance in instances:
            db.session.delete(instance)
        self._commit()
        return len(instances)

    @staticmethod
    def _to_record(instance):
        return instance.to_dict() if instance is not None else None


class SqlStore(Store):
    """Store backed by Flask-SQLAlchemy; needs an application context."""

    kind = 'sql'

    def __init__(self):
        self.users = SqlCollection('users', User)
        self.rooms = SqlCollection('rooms', Room)
        self.offers = SqlCollection('offers', Offer)
