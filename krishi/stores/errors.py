# Store Exceptions


class StoreError(Exception):
    """Base class for storage backend failures."""


class RecordNotFound(StoreError):
    def __init__(self, kind, record_id):
        super().__init__(f'{kind} {record_id} not found')
        self.kind = kind
        self.record_id = record_id


class InvalidTransition(StoreError):
    """Raised when a question is answered twice."""


class InvalidRecord(StoreError):
    """Raised when a record fails a store-level invariant."""
