"""Query documents shared by both stores.

A query maps a record field to either a value (equality) or a dict of
``{operator: operand}`` pairs, e.g. ``{"validFrom": {"$lte": now}}``.
Operators are plain functions from :mod:`operator`, so the same table works
on Python values (file store) and on SQLAlchemy columns (SQL store).
"""
import operator
import re

OPERATORS = {
    '$lt': operator.lt,
    '$lte': operator.le,
    '$gt': operator.gt,
    '$gte': operator.ge,
    '$ne': operator.ne,
}

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def conditions(query):
    """Yield ``(field, compare, operand)`` triples for a query."""
    for field, condition in (query or {}).items():
        if isinstance(condition, dict):
            for name, operand in condition.items():
                try:
                    compare = OPERATORS[name]
                except KeyError:
                    raise ValueError(f'Unsupported query operator: {name}') from None
                yield field, compare, operand
        else:
            yield field, operator.eq, condition


def matches(record, query):
    for field, compare, operand in conditions(query):
        value = record.get(field)
        if value is None and compare is not operator.eq and compare is not operator.ne:
            return False
        if not compare(value, operand):
            return False
    return True


def to_attribute(field):
    """``validFrom`` -> ``valid_from``; ``_id`` -> ``id``."""
    if field == '_id':
        return 'id'
    return _CAMEL_BOUNDARY.sub('_', field).lower()


def to_field(attribute):
    """``valid_from`` -> ``validFrom``; ``id`` -> ``_id``."""
    if attribute == 'id':
        return '_id'
    head, *rest = attribute.split('_')
    return head + ''.join(part.title() for part in rest)
