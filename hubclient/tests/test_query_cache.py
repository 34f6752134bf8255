from unittest.mock import MagicMock

from django.test import SimpleTestCase

from hubclient.query_cache import QueryCache


class QueryCacheTests(SimpleTestCase):
    def setUp(self):
        self.cache = QueryCache()

    def test_fetch_is_cached_until_invalidated(self):
        fetcher = MagicMock(side_effect=[{"v": 1}, {"v": 2}])
        self.assertEqual(self.cache.fetch_query(("user", "profile", "1"), fetcher), {"v": 1})
        self.assertEqual(self.cache.fetch_query(("user", "profile", "1"), fetcher), {"v": 1})
        self.assertEqual(fetcher.call_count, 1)

        self.assertEqual(self.cache.invalidate_queries(("user",)), 1)
        self.assertTrue(self.cache.is_stale(("user", "profile", "1")))
        self.assertEqual(self.cache.fetch_query(("user", "profile", "1"), fetcher), {"v": 2})

    def test_invalidate_matches_prefix_only(self):
        self.cache.set_query_data(("user", "profile", "1"), {})
        self.cache.set_query_data(("user", "followers", "1"), {})
        self.cache.set_query_data(("community", "members", "all", None), {})
        self.assertEqual(self.cache.invalidate_queries(("user", "profile")), 1)
        self.assertFalse(self.cache.is_stale(("user", "followers", "1")))

    def test_set_with_updater(self):
        self.cache.set_query_data(("n",), 1)
        self.assertEqual(self.cache.set_query_data(("n",), lambda prev: prev + 1), 2)

    def test_expired_entry_is_stale(self):
        cache = QueryCache(stale_time=0)
        cache.set_query_data(("k",), "v")
        self.assertTrue(cache.is_stale(("k",)))

    def test_cancel_discards_in_flight_result(self):
        key = ("user", "followers", "1")
        self.cache.set_query_data(key, {"followers": []})
        self.cache.invalidate_queries(key)

        def slow_fetch():
            # an optimistic write lands while the request is in flight
            self.cache.cancel_queries(key)
            self.cache.set_query_data(key, {"followers": ["optimistic"]})
            return {"followers": ["server"]}

        self.assertEqual(self.cache.fetch_query(key, slow_fetch), {"followers": ["optimistic"]})
        self.assertEqual(self.cache.get_query_data(key), {"followers": ["optimistic"]})
