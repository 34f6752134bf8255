"""Versioned response cache for the public cocktail listing."""

import hashlib
import json
import logging
import threading

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

VERSION_KEY = "cocktails:list:version"

_lock = threading.Lock()
_metrics = {"hits": 0, "misses": 0, "invalidations": 0}


def _version():
    version = cache.get(VERSION_KEY)
    if version is None:
        cache.add(VERSION_KEY, 1, timeout=None)
        version = cache.get(VERSION_KEY) or 1
    return version


def listing_key(params):
    """Build a cache key from the normalised query parameters."""
    normalised = json.dumps(sorted((str(k), str(v)) for k, v in params.items()))
    digest = hashlib.sha1(normalised.encode("utf-8")).hexdigest()
    return f"cocktails:list:v{_version()}:{digest}"


def get_listing(params):
    """Return the cached listing payload for params, or None."""
    payload = cache.get(listing_key(params))
    with _lock:
        _metrics["hits" if payload is not None else "misses"] += 1
    return payload


def set_listing(params, payload):
    cache.set(listing_key(params), payload, timeout=settings.COCKTAIL_LIST_CACHE_SECONDS)


def invalidate_cocktail_cache():
    """Orphan every cached listing by bumping the version counter."""
    try:
        cache.incr(VERSION_KEY)
    except ValueError:
        cache.set(VERSION_KEY, 2, timeout=None)
    with _lock:
        _metrics["invalidations"] += 1
    logger.debug("Cocktail listing cache invalidated")


def cache_metrics():
    with _lock:
        hits, misses, invalidations = _metrics["hits"], _metrics["misses"], _metrics["invalidations"]
    total = hits + misses
    return {
        "hits": hits,
        "misses": misses,
        "invalidations": invalidations,
        "hitRatio": (hits / total) if total else 0,
    }


def reset_metrics():
    with _lock:
        for key in _metrics:
            _metrics[key] = 0
