"""Domain error type and the DRF exception handler producing failure envelopes."""

import logging
import math

from django.core.exceptions import ObjectDoesNotExist
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from django.http import Http404
from rest_framework import exceptions
from rest_framework.response import Response

from cocktails.utils.http import fail_body

logger = logging.getLogger(__name__)

NOT_AUTHORIZED = "Not authorized to access this route"


class ApiError(Exception):
    """Error carrying the HTTP status, message, machine code and extra payload."""

    def __init__(self, status, message, code="ERROR", **extra):
        super().__init__(message)
        self.status = status
        self.message = message
        self.code = code
        self.extra = extra


def flatten_errors(detail, field=None):
    """Turn DRF's nested error detail into a flat [{field, message}] list."""
    if isinstance(detail, dict):
        errors = []
        for key, value in detail.items():
            name = key if field is None else f"{field}.{key}"
            if key == "non_field_errors":
                name = field
            errors.extend(flatten_errors(value, name))
        return errors
    if isinstance(detail, list):
        errors = []
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list)):
                errors.extend(flatten_errors(value, f"{field}[{index}]" if field else str(index)))
            else:
                errors.append({"field": field, "message": str(value)})
        return errors
    return [{"field": field, "message": str(detail)}]


def _fail(status, message, code, headers=None, **extra):
    return Response(fail_body(message, code, **extra), status=status, headers=headers)


def api_exception_handler(exc, context):
    """Map every exception raised inside an API view to the failure envelope."""
    if isinstance(exc, ApiError):
        return _fail(exc.status, exc.message, exc.code, **exc.extra)

    if isinstance(exc, exceptions.ValidationError):
        return _fail(400, "Validation failed", "VALIDATION", errors=flatten_errors(exc.detail))

    if isinstance(exc, DjangoValidationError):
        messages = exc.message_dict if hasattr(exc, "error_dict") else {None: exc.messages}
        return _fail(400, "Validation failed", "VALIDATION", errors=flatten_errors(messages))

    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        headers = {}
        if getattr(exc, "auth_header", None):
            headers["WWW-Authenticate"] = exc.auth_header
        return _fail(exc.status_code, NOT_AUTHORIZED, "AUTH", headers=headers)

    if isinstance(exc, exceptions.PermissionDenied):
        code = getattr(exc.detail, "code", None)
        if not code or code == exceptions.PermissionDenied.default_code:
            code = "FORBIDDEN"
        return _fail(403, str(exc.detail), code)

    if isinstance(exc, DjangoPermissionDenied):
        return _fail(403, "Forbidden", "FORBIDDEN")

    if isinstance(exc, (exceptions.NotFound, Http404, ObjectDoesNotExist)):
        return _fail(404, "Resource not found", "NOT_FOUND")

    if isinstance(exc, exceptions.Throttled):
        retry_after = math.ceil(exc.wait) if exc.wait is not None else None
        headers = {"Retry-After": str(retry_after)} if retry_after is not None else None
        return _fail(429, str(exc.detail), "RATE_LIMIT", headers=headers, retryAfterSeconds=retry_after)

    if isinstance(exc, IntegrityError):
        logger.warning("Integrity error: %s", exc)
        return _fail(400, "Duplicate value entered", "DUPLICATE")

    if isinstance(exc, exceptions.APIException):
        return _fail(exc.status_code, str(exc.detail), str(getattr(exc.detail, "code", "ERROR")).upper())

    view = context.get("view")
    logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "api view")
    return _fail(500, "Server error", "SERVER_ERROR")
