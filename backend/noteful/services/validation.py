"""
Noteful Backend — Request Body Validation
==========================================

What:  Pure checks run on a parsed JSON body before any database call.
Why:   The API reports missing fields with specific messages
       (`Missing 'name' in request body`) that generic schema validation
       (FastAPI's 422) does not produce. Running these checks first also
       guarantees that a rejected request never writes anything.
How:   Plain functions raising the ValidationError family from
       noteful.exceptions. No I/O, no state.

Presence rule:
    A field counts as present when its key exists and its value is neither
    None nor a blank string. `{"name": ""}` is treated like `{}`.
"""

import re
from typing import Any, Dict, Mapping, Sequence

from noteful.exceptions import MissingFieldError, NoUpdatableFieldsError, ValidationError

# ASCII digits only: str.isdigit() also accepts "²", which int() rejects
INTEGER_STRING = re.compile(r"-?[0-9]+", re.ASCII)


def is_present(body: Mapping[str, Any], field: str) -> bool:
    value = body.get(field)
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def require_fields(body: Mapping[str, Any], fields: Sequence[str]) -> None:
    """
    Ensures every field in `fields` is present.

    Fields are checked in order and the first missing one is reported, so
    `fields` doubles as the error precedence.

    Raises:
        MissingFieldError: naming the first absent/empty field (→ 400)
    """
    for field in fields:
        if not is_present(body, field):
            raise MissingFieldError(field)


def require_any(body: Mapping[str, Any], fields: Sequence[str]) -> None:
    """
    Ensures a partial update carries at least one updatable field.

    Raises:
        NoUpdatableFieldsError: none of `fields` is present (→ 400)
    """
    if not any(is_present(body, field) for field in fields):
        raise NoUpdatableFieldsError(fields)


def pick_fields(body: Mapping[str, Any], fields: Sequence[str]) -> Dict[str, Any]:
    """Returns the present subset of `fields`; unknown keys are dropped."""
    return {field: body[field] for field in fields if is_present(body, field)}


def ensure_string(body: Mapping[str, Any], field: str) -> None:
    if field in body and body[field] is not None and not isinstance(body[field], str):
        raise ValidationError(message=f"'{field}' must be a string", field=field)


def coerce_int(value: Any, field: str) -> int:
    """
    Converts an id given in a JSON body to int.

    Accepts integers and numeric strings ("2"); rejects booleans, floats
    with a fraction, and anything else.
    """
    if isinstance(value, bool):
        raise ValidationError(message=f"'{field}' must be an integer", field=field)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and INTEGER_STRING.fullmatch(value.strip()):
        return int(value.strip())
    raise ValidationError(message=f"'{field}' must be an integer", field=field)
