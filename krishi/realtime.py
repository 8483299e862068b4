"""
In-process change feed.

Stores publish an event after every successful write. Listeners either
subscribe with a callback or poll ``changes_since`` with the last version
they saw (the /api/changes endpoint does the latter for browsers).
"""
import logging
import threading
from collections import deque, namedtuple
from datetime import datetime

logger = logging.getLogger(__name__)

EVENTS = ('INSERT', 'UPDATE', 'DELETE')
ALL_TABLES = '*'

Change = namedtuple('Change', ['version', 'table', 'event', 'record_id', 'at'])


class ChangeFeed:
    def __init__(self, app=None, max_history=500):
        self.max_history = max_history
        self._lock = threading.Lock()
        self._versions = {}
        self._history = {}
        self._subscribers = {}
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.max_history = app.config.get('CHANGE_FEED_SIZE', self.max_history)
        app.extensions['change_feed'] = self

    def subscribe(self, table, callback):
        """Register ``callback(change)`` for ``table`` (or ``'*'``).

        Returns a function that removes the subscription.
        """
        with self._lock:
            self._subscribers.setdefault(table, []).append(callback)

        def unsubscribe():
            with self._lock:
                listeners = self._subscribers.get(table, [])
                if callback in listeners:
                    listeners.remove(callback)

        return unsubscribe

    def publish(self, table, event, record_id):
        if event not in EVENTS:
            raise ValueError(f'Unknown change event: {event}')

        with self._lock:
            version = self._versions.get(table, 0) + 1
            self._versions[table] = version
            change = Change(version, table, event, str(record_id), datetime.utcnow())
            history = self._history.get(table)
            if history is None:
                history = self._history[table] = deque(maxlen=self.max_history)
            history.append(change)
            listeners = list(self._subscribers.get(table, [])) + list(self._subscribers.get(ALL_TABLES, []))

        for listener in listeners:
            try:
                listener(change)
            except Exception:
                logger.exception('Change listener failed for %s %s', table, event)
        return change

    def version(self, table):
        with self._lock:
            return self._versions.get(table, 0)

    def changes_since(self, table, version=0):
        with self._lock:
            return [c for c in self._history.get(table, ()) if c.version > version]
