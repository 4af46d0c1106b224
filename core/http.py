"""
JSON helpers shared by the ``/api/`` views.

Every error response has the same shape, ``{"message": "..."}``, which the
browser shows as a toast.
"""

import json

from django.http import JsonResponse


class BadRequest(Exception):
    """Raised while reading a request that cannot be processed."""

    status = 400

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


def json_error(message, status=400):
    return JsonResponse({'message': message}, status=status)


def parse_json_body(request):
    """
    Decode the request body as a JSON object.

    An empty body is treated as ``{}``; anything that is not an object
    raises ``BadRequest``.
    """
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise BadRequest('Invalid JSON body.')
    if not isinstance(payload, dict):
        raise BadRequest('Expected a JSON object.')
    return payload


def first_form_error(form):
    """First validation message of a bound, invalid form."""
    for errors in form.errors.values():
        if errors:
            return errors[0]
    return 'Invalid data.'


def form_error_response(form):
    return json_error(first_form_error(form), status=400)


# Largest primary key a BigAutoField can hold
MAX_ID = 2 ** 63 - 1


def parse_id(value):
    """
    Turn a submitted primary key into an int.

    Raises ValueError for anything that is not a positive integer within
    the range of a primary key column.
    """
    try:
        number = int(value)
    except (TypeError, OverflowError):
        raise ValueError(value)
    if not 1 <= number <= MAX_ID:
        raise ValueError(value)
    return number


def require_id(payload, key):
    """Read an integer primary key (e.g. ``sampleId``) from a JSON payload."""
    value = payload.get(key)
    if value in (None, ''):
        raise BadRequest(f'{key} is required.')
    try:
        return parse_id(value)
    except ValueError:
        raise BadRequest(f'{key} must be a valid id.')
