"""In-process change feed keyed by table name.

Writers publish a :class:`Change` after a row is inserted, updated or
deleted; subscribers get a callback and refetch whatever they show. Nothing
about ordering or delivery is promised beyond "eventually told to refetch".
"""

import logging
from collections import defaultdict
from dataclasses import dataclass

from django.db import DatabaseError

logger = logging.getLogger(__name__)

ALL_TABLES = '*'


@dataclass(frozen=True)
class Change:
    table: str
    action: str  # insert, update or delete
    object_id: str


class Subscription:
    def __init__(self, feed, table, callback):
        self._feed = feed
        self.table = table
        self.callback = callback
        self.active = True

    def unsubscribe(self):
        if self.active:
            self._feed._remove(self)
            self.active = False


class ChangeFeed:
    def __init__(self):
        self._subscriptions = defaultdict(list)

    def subscribe(self, table, callback):
        """Call ``callback(change)`` for every change to ``table`` (``'*'`` for all)."""
        subscription = Subscription(self, table, callback)
        self._subscriptions[table].append(subscription)
        return subscription

    def _remove(self, subscription):
        subscriptions = self._subscriptions.get(subscription.table, [])
        if subscription in subscriptions:
            subscriptions.remove(subscription)

    def publish(self, change):
        targets = list(self._subscriptions.get(change.table, ())) + list(self._subscriptions.get(ALL_TABLES, ()))
        for subscription in targets:
            try:
                subscription.callback(change)
            except DatabaseError:
                # a failed database write rolls back with the change that caused it
                raise
            except Exception:
                # any other listener error is logged and the remaining listeners still run
                logger.exception('Change listener failed for %s %s', change.table, change.action)
        return len(targets)


feed = ChangeFeed()
