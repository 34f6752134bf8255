"""Per-IP request throttles for the API, the auth endpoints and uploads."""

import logging
import re

from django.conf import settings
from rest_framework import exceptions
from rest_framework.throttling import SimpleRateThrottle

logger = logging.getLogger(__name__)

PERIOD_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}
RATE_PATTERN = re.compile(r"(\d*)([smhd])")


class WindowRateThrottle(SimpleRateThrottle):
    """
    SimpleRateThrottle keyed by client IP whose rates come from
    `settings.RATE_LIMITS` at request time.

    Rates accept a window multiplier, e.g. "5/15m" is five requests per
    fifteen minutes. A scope with no rate is not limited.
    """

    message = "Too many requests from this IP, please try again later."

    def get_rate(self):
        return settings.RATE_LIMITS.get(self.scope)

    def parse_rate(self, rate):
        if rate is None:
            return None, None
        num, period = rate.split("/")
        match = RATE_PATTERN.fullmatch(period.strip())
        if match is None:
            raise ValueError(f"Invalid rate period: {period!r}")
        window = int(match.group(1) or 1) * PERIOD_SECONDS[match.group(2)]
        return int(num), window

    def get_cache_key(self, request, view):
        return self.cache_format % {"scope": self.scope, "ident": self.get_ident(request)}

    def applies_to(self, request):
        return True

    def allow_request(self, request, view):
        if not settings.RATE_LIMIT_ENABLED or not self.applies_to(request):
            return True
        # rates may change between requests (tests, reloads)
        self.rate = self.get_rate()
        self.num_requests, self.duration = self.parse_rate(self.rate)
        if super().allow_request(request, view):
            return True
        logger.warning("Rate limit %s hit by %s on %s", self.scope, self.get_ident(request), request.path)
        raise exceptions.Throttled(wait=self.wait(), detail=self.message)


class GeneralRateThrottle(WindowRateThrottle):
    scope = "general"


class AuthRateThrottle(WindowRateThrottle):
    scope = "auth"
    message = "Too many authentication attempts, please try again later."


class UploadRateThrottle(WindowRateThrottle):
    """Counts only writes that may carry a file (create, update, profile edit)."""
    scope = "upload"
    message = "Too many file uploads, please try again later."
    methods = ("POST", "PUT", "PATCH")

    def applies_to(self, request):
        return request.method in self.methods


AUTH_THROTTLES = [GeneralRateThrottle, AuthRateThrottle]
UPLOAD_THROTTLES = [GeneralRateThrottle, UploadRateThrottle]
