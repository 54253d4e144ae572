from abc import ABC, abstractmethod
from datetime import datetime, timezone
from uuid import uuid4


class StoreError(Exception):
    """Raised when a store cannot complete an operation."""


class ConstraintViolation(StoreError):
    def __init__(self, collection, field=None, detail=None):
        self.collection = collection
        self.field = field
        message = f'Constraint violated on {collection}'
        if field:
            message += f'.{field}'
        if detail:
            message += f': {detail}'
        super().__init__(message)


def utcnow():
    """Current UTC time as a naive datetime, the form every store keeps."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id():
    return uuid4().hex


class Collection(ABC):
    """One record type in a store.

    Records go in and come out as plain dicts keyed by their JSON field
    names (``_id``, ``createdAt``, ``validFrom`` ...).
    """

    name = None

    @abstractmethod
    def find_one(self, query):
        """Return the first record matching ``query`` or ``None``."""

    @abstractmethod
    def find(self, query=None):
        """Return every record matching ``query`` in insertion order."""

    @abstractmethod
    def find_by_id(self, record_id):
        pass

    @abstractmethod
    def create(self, data):
        """Store ``data`` and return it with ``_id`` and timestamps set."""

    @abstractmethod
    def update_by_id(self, record_id, changes):
        """Merge ``changes`` into a record; ``None`` if it does not exist."""

    @abstractmethod
    def delete_by_id(self, record_id):
        """Delete a record and return it; ``None`` if it does not exist."""

    @abstractmethod
    def delete_many(self, query=None):
        """Delete every matching record and return how many went."""

    def insert_many(self, records):
        return [self.create(record) for record in records]


class Store(ABC):
    kind = None

    users: Collection
    rooms: Collection
    offers: Collection
