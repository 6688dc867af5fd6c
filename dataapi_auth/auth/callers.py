"""Caller classification and the rejection responses that depend on it."""

from http import HTTPStatus

from flask import Response, jsonify, make_response, redirect, request

PROGRAMMATIC = 'programmatic'
"""API client; gets JSON errors."""

INTERACTIVE = 'interactive'
"""Browser; gets redirects."""

UNAUTHORIZED = 'Unauthorized'
FORBIDDEN = 'Forbidden: Admin access required'


def classify(path: str, api_prefix: str = '/api') -> str:
    """Classify a request by its path."""
    return PROGRAMMATIC if path.startswith(api_prefix) else INTERACTIVE


def is_api_request(api_prefix: str = '/api') -> bool:
    """Determine whether the current request comes from an API client."""
    return classify(request.path, api_prefix) == PROGRAMMATIC


def requested_url() -> str:
    """
    Get the URL of the current request as seen by the browser.

    Includes the mount point of the application and the query string. Query
    bytes that are not valid UTF-8 are replaced rather than raised on.
    """
    url = request.script_root + request.path
    if request.query_string:
        query = request.query_string.decode('utf-8', errors='replace')
        return f'{url}?{query}'
    return url


def error(message: str, status: int) -> Response:
    """Build a JSON error response."""
    return make_response(jsonify(status='error', message=message), status)


def unauthorized() -> Response:
    return error(UNAUTHORIZED, HTTPStatus.UNAUTHORIZED)


def forbidden() -> Response:
    return error(FORBIDDEN, HTTPStatus.FORBIDDEN)


def redirect_to(location: str) -> Response:
    return redirect(location)
