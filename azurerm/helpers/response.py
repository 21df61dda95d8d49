"""
Helpers for interpreting Azure SDK errors and responses.
"""

from typing import Any

from azure.core.exceptions import ResourceNotFoundError

HTTP_NOT_FOUND = 404


def _status_code(obj: Any) -> Any:
    status = getattr(obj, "status_code", None)
    if status is None and getattr(obj, "response", None) is not None:
        status = getattr(obj.response, "status_code", None)
    return status


def was_not_found(obj: Any) -> bool:
    """
    True when an SDK error (or raw response) means "resource does not exist".

    The SDK raises ResourceNotFoundError for most 404s, but some operations
    surface a plain HttpResponseError carrying the status code.
    """
    if obj is None:
        return False
    if isinstance(obj, ResourceNotFoundError):
        return True
    return _status_code(obj) == HTTP_NOT_FOUND


def raw_json(pipeline_response: Any, deserialized: Any, headers: Any) -> Any:
    """``cls`` hook returning the response body as parsed JSON instead of the SDK model."""
    return pipeline_response.http_response.json()
