# Storage backends
from flask import current_app

from krishi.stores.errors import StoreError, RecordNotFound, InvalidTransition, InvalidRecord
from krishi.stores.base import QUESTIONS_TABLE, WAREHOUSES_TABLE, normalize_capacity
from krishi.stores.sql import SqlQuestionStore, SqlWarehouseStore
from krishi.stores.local import LocalQuestionStore, LocalWarehouseStore

BACKENDS = ('sql', 'local')
TABLES = (QUESTIONS_TABLE, WAREHOUSES_TABLE)


def init_stores(app, feed):
    backend = app.config.get('STORAGE_BACKEND', 'sql')
    if backend == 'sql':
        questions = SqlQuestionStore(feed)
        warehouses = SqlWarehouseStore(feed)
    elif backend == 'local':
        directory = app.config['LOCAL_STORE_DIR']
        questions = LocalQuestionStore(directory, feed)
        warehouses = LocalWarehouseStore(directory, feed)
    else:
        raise ValueError(f'Unknown STORAGE_BACKEND {backend!r}, expected one of {BACKENDS}')

    app.extensions['question_store'] = questions
    app.extensions['warehouse_store'] = warehouses
    app.logger.info('Using %s storage backend', backend)


def get_question_store():
    return current_app.extensions['question_store']


def get_warehouse_store():
    return current_app.extensions['warehouse_store']


def get_change_feed():
    return current_app.extensions['change_feed']


__all__ = [
    'StoreError', 'RecordNotFound', 'InvalidTransition', 'InvalidRecord',
    'QUESTIONS_TABLE', 'WAREHOUSES_TABLE', 'TABLES', 'normalize_capacity',
    'SqlQuestionStore', 'SqlWarehouseStore', 'LocalQuestionStore', 'LocalWarehouseStore',
    'init_stores', 'get_question_store', 'get_warehouse_store', 'get_change_feed',
]
