import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


ERROR_KINDS = {
    exceptions.ValidationError: "validation",
    exceptions.ParseError: "validation",
    exceptions.NotAuthenticated: "not_authenticated",
    exceptions.AuthenticationFailed: "not_authenticated",
    exceptions.PermissionDenied: "forbidden",
    exceptions.NotFound: "not_found",
    exceptions.MethodNotAllowed: "method_not_allowed",
}


def get_error_kind(exc):
    """
    Stable error kind for an exception.

    Exceptions defining ``default_code`` (such as ``Conflict``) fall back to it.
    """
    if isinstance(exc, Http404):
        return "not_found"
    if isinstance(exc, DjangoPermissionDenied):
        return "forbidden"
    for exc_class, kind in ERROR_KINDS.items():
        if isinstance(exc, exc_class):
            return kind
    return getattr(exc, "default_code", "error")


def api_exception_handler(exc, context):
    """
    Wrap DRF's handler so every error body carries a ``kind`` next to the
    human readable ``detail`` (or the field errors of a validation failure).
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    kind = get_error_kind(exc)
    if isinstance(response.data, dict):
        response.data = {"kind": kind, **response.data}
    else:
        response.data = {"kind": kind, "detail": response.data}

    view = context.get("view")
    logger.info(
        f"{kind} error in {view.__class__.__name__ if view else 'unknown view'}: {exc}"
    )
    return response
