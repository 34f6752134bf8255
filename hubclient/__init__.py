"""
Python client for the BartendersHub API.

Wraps the REST endpoints, keeps fetched data in a keyed query cache and
applies follow/unfollow optimistically with rollback on failure.
"""

from hubclient.api import ApiClient, ApiClientError
from hubclient.community import CommunityClient
from hubclient.feed import CocktailFeed
from hubclient.query_cache import QueryCache
from hubclient.realtime import CommunityListener

__all__ = [
    "ApiClient",
    "ApiClientError",
    "CocktailFeed",
    "CommunityClient",
    "CommunityListener",
    "QueryCache",
]
