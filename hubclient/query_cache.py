"""Keyed store of fetched data with prefix invalidation and cancellation."""

import logging
import threading
import time

logger = logging.getLogger(__name__)


class Query:
    """One cache entry: data plus the bookkeeping needed to refetch it."""

    def __init__(self, key):
        self.key = key
        self.data = None
        self.fetcher = None
        self.updated_at = None
        self.is_stale = True
        self.generation = 0


def matches(key, prefix):
    prefix = tuple(prefix)
    return tuple(key[:len(prefix)]) == prefix


class QueryCache:
    """
    Client-side cache keyed by tuples such as ("user", "profile", 7).

    Reads through `fetch_query` return cached data while it is fresh.
    `invalidate_queries` marks matching entries stale so the next read
    refetches; `cancel_queries` discards results of fetches that were
    already in flight.
    """

    def __init__(self, stale_time=300):
        self.stale_time = stale_time
        self._queries = {}
        self._lock = threading.RLock()

    def _query(self, key):
        key = tuple(key)
        query = self._queries.get(key)
        if query is None:
            query = self._queries[key] = Query(key)
        return query

    def _is_fresh(self, query):
        if query.is_stale or query.updated_at is None:
            return False
        return time.monotonic() - query.updated_at < self.stale_time

    def get_query_data(self, key):
        with self._lock:
            query = self._queries.get(tuple(key))
            return None if query is None else query.data

    def set_query_data(self, key, data):
        """Store data for key; a callable receives the previous value."""
        with self._lock:
            query = self._query(key)
            query.data = data(query.data) if callable(data) else data
            query.updated_at = time.monotonic()
            query.is_stale = False
            return query.data

    def fetch_query(self, key, fetcher):
        """Return fresh cached data or call `fetcher` and store its result."""
        with self._lock:
            query = self._query(key)
            query.fetcher = fetcher
            if self._is_fresh(query):
                return query.data
            generation = query.generation

        data = fetcher()

        with self._lock:
            if query.generation != generation:
                logger.debug("Discarding cancelled fetch for %s", query.key)
                return query.data
            query.data = data
            query.updated_at = time.monotonic()
            query.is_stale = False
            return data

    def cancel_queries(self, prefix):
        """Drop the results of in-flight fetches under prefix."""
        with self._lock:
            for query in self.find(prefix):
                query.generation += 1

    def invalidate_queries(self, prefix):
        """Mark matching entries stale; returns how many were marked."""
        with self._lock:
            found = self.find(prefix)
            for query in found:
                query.is_stale = True
            return len(found)

    def is_stale(self, key):
        with self._lock:
            query = self._queries.get(tuple(key))
            return query is None or not self._is_fresh(query)

    def find(self, prefix):
        return [query for key, query in self._queries.items() if matches(key, prefix)]

    def clear(self):
        with self._lock:
            self._queries.clear()
