"""Flask helpers for attaching the current request to log calls."""

from flask import has_request_context, request


def request_fields() -> dict:
    """``extra=`` mapping carrying the active Flask request, if there is one.

    Usage: ``logger.error("checkout failed", extra=request_fields())``
    """
    if not has_request_context():
        return {}
    return {"http_request": request._get_current_object()}
