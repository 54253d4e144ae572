"""Persistence adapters.

``init_store`` picks the implementation once, when the app is created:
a configured ``DATABASE_URL`` selects the SQL store, otherwise records are
kept in the JSON file at ``MOCK_DB_PATH``.
"""
from flask import current_app

from hotel_backend.logging import get_logger
from hotel_backend.store.base import Collection, ConstraintViolation, Store, StoreError

logger = get_logger(__name__)

__all__ = ['Collection', 'ConstraintViolation', 'Store', 'StoreError', 'init_store', 'get_store']


def init_store(app):
    if app.config.get('DATABASE_URL'):
        from hotel_backend import db
        from hotel_backend.store.sql import SqlStore

        app.config['SQLALCHEMY_DATABASE_URI'] = app.config['DATABASE_URL']
        db.init_app(app)
        with app.app_context():
            db.create_all()
        store = SqlStore()
        logger.info('store_selected', store=store.kind)
    else:
        from hotel_backend.store.mock import JsonFileStore

        store = JsonFileStore(app.config['MOCK_DB_PATH'])
        logger.info('store_selected', store=store.kind, path=str(store.path))

    app.extensions['store'] = store
    return store


def get_store() -> Store:
    return current_app.extensions['store']
