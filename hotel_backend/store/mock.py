"""File-backed store used when no database is configured.

The whole document is read on every call and rewritten on every write.
There is no locking, so concurrent writers can lose updates; this store is
meant for local development only.
"""
import json
import os
import tempfile
from datetime import datetime
from pathlib import Path

from hotel_backend.logging import get_logger
from hotel_backend.store.base import Collection, ConstraintViolation, Store, new_id, utcnow
from hotel_backend.store.query import matches

logger = get_logger(__name__)

COLLECTIONS = ('users', 'rooms', 'offers')
DATETIME_FIELDS = frozenset({'createdAt', 'updatedAt', 'validFrom', 'validUntil'})


def _encode(value):
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f'Object of type {type(value).__name__} is not JSON serializable')


def _decode(record):
    for field in DATETIME_FIELDS.intersection(record):
        if isinstance(record[field], str):
            record[field] = datetime.fromisoformat(record[field])
    return record


class JsonFileCollection(Collection):
    def __init__(self, store, name, unique=(), timestamps=True):
        self.store = store
        self.name = name
        self.unique = tuple(unique)
        self.timestamps = timestamps

    def _check_unique(self, records, candidate, skip_id=None):
        for field in self.unique:
            value = candidate.get(field)
            if value is None:
                continue
            for record in records:
                if record['_id'] != skip_id and record.get(field) == value:
                    raise ConstraintViolation(self.name, field, f'duplicate value {value!r}')

    def find_one(self, query):
        return next((r for r in self.store.read()[self.name] if matches(r, query)), None)

    def find(self, query=None):
        return [r for r in self.store.read()[self.name] if matches(r, query)]

    def find_by_id(self, record_id):
        return self.find_one({'_id': record_id})

    def _build(self, data):
        now = utcnow()
        record = {**data, '_id': new_id(), 'createdAt': now}
        if self.timestamps:
            record['updatedAt'] = now
        return record

    def create(self, data):
        return self.insert_many([data])[0]

    def insert_many(self, records):
        document = self.store.read()
        stored = document[self.name]
        created = []
        for data in records:
            record = self._build(data)
            self._check_unique(stored, record)
            stored.append(record)
            created.append(record)
        self.store.write(document)
        return created

    def update_by_id(self, record_id, changes):
        document = self.store.read()
        stored = document[self.name]
        for index, record in enumerate(stored):
            if record['_id'] == record_id:
                break
        else:
            return None
        changes = {k: v for k, v in changes.items() if k not in ('_id', 'createdAt')}
        merged = {**record, **changes}
        if self.timestamps:
            merged['updatedAt'] = utcnow()
        self._check_unique(stored, merged, skip_id=record_id)
        stored[index] = merged
        self.store.write(document)
        return merged

    def delete_by_id(self, record_id):
        document = self.store.read()
        stored = document[self.name]
        for index, record in enumerate(stored):
            if record['_id'] == record_id:
                del stored[index]
                self.store.write(document)
                return record
        return None

    def delete_many(self, query=None):
        document = self.store.read()
        kept = [r for r in document[self.name] if not matches(r, query)]
        removed = len(document[self.name]) - len(kept)
        document[self.name] = kept
        self.store.write(document)
        return removed


class JsonFileStore(Store):
    kind = 'mock'

    def __init__(self, path):
        self.path = Path(path)
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.write({})
        self.users = JsonFileCollection(self, 'users', unique=('email',), timestamps=False)
        self.rooms = JsonFileCollection(self, 'rooms')
        self.offers = JsonFileCollection(self, 'offers', unique=('code',))

    def read(self):
        try:
            with open(self.path, encoding='utf-8') as f:
                document = json.load(f, object_hook=_decode)
        except (OSError, ValueError) as exc:
            logger.warning('mock_db_unreadable', path=str(self.path), error=str(exc))
            document = {}
        if not isinstance(document, dict):
            document = {}
        for name in COLLECTIONS:
            document.setdefault(name, [])
        return document

    def write(self, document):
        for name in COLLECTIONS:
            document.setdefault(name, [])
        # Swapped in with os.replace; the target is never half-written
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name + '.', suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=2, default=_encode)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise
