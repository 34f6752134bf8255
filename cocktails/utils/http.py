"""Response envelope helpers used by every API view."""

from rest_framework.response import Response


def success_response(data=None, meta=None, status=200):
    """
    Wrap `data` in the success envelope.

    Plain-dict data and meta are also hoisted to the top level so clients
    can read `token`, `user`, `count` and friends directly.
    """
    hoisted_data = dict(data) if isinstance(data, dict) else {}
    hoisted_meta = dict(meta) if isinstance(meta, dict) else {}
    body = {
        "success": True,
        **hoisted_data,
        **hoisted_meta,
        "data": data,
        "meta": meta or {},
    }
    return Response(body, status=status)


def fail_body(message, code="ERROR", **extra):
    return {
        "success": False,
        "message": message,
        "code": code,
        "error": {"message": message, "code": code, **extra},
    }


def fail_response(status, message, code="ERROR", **extra):
    return Response(fail_body(message, code, **extra), status=status)


def parse_pagination(params, default_limit=10, max_limit=100):
    """Return (page, limit) from query params, clamped to sane bounds."""
    try:
        page = int(params.get("page") or 1)
    except (TypeError, ValueError):
        page = 1
    try:
        limit = int(params.get("limit") or default_limit)
    except (TypeError, ValueError):
        limit = default_limit
    return max(1, page), min(max(1, limit), max_limit)


def page_meta(total, page, limit, count):
    pages = (total + limit - 1) // limit if limit else 0
    return {"count": count, "total": total, "page": page, "pages": pages}


def is_truthy(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in ("1", "true", "yes", "on")
