"""
Input validation for perk payloads.

``validate_perk`` is a pure function of (payload, mode).  It runs the
request model generated for the mode and returns a mapping keyed by
storage column names containing exactly the fields that should be
written:

* in ``strict-create`` mode every field, with defaults applied;
* in ``partial-update`` mode only the fields the caller supplied.

Violations are raised as ``ValidationError`` with a message naming the
offending field and the rule it broke.
"""

from typing import Any, Dict, Mapping

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from perks_api.app.core.exceptions import ValidationError
from perks_api.app.schemas.perk import (
    PARTIAL_UPDATE,
    STRICT_CREATE,
    PerkCreate,
    PerkUpdate,
    ValidationMode,
)


_MODELS = {
    STRICT_CREATE.name: PerkCreate,
    PARTIAL_UPDATE.name: PerkUpdate,
}

# Error types whose pydantic wording reads badly after a field name.
_MESSAGES = {
    "missing": "is required",
    "extra_forbidden": "is not allowed",
    "json_invalid": "must be valid JSON",
}

# Leading ``loc`` parts FastAPI adds to say where a request value came from.
_REQUEST_SOURCES = {"body", "query", "path"}


def format_error_detail(error: Mapping[str, Any]) -> str:
    """Render one pydantic error as ``"<field>" <rule>``.

    Request-level errors from FastAPI (a missing body, unparseable JSON)
    carry no field name and are reported against ``"value"``.
    """
    loc = list(error.get("loc", ()))
    if loc and loc[0] in _REQUEST_SOURCES:
        loc = loc[1:]
    if error["type"] == "json_invalid":
        loc = []
    field_name = ".".join(str(part) for part in loc) or "value"
    detail = _MESSAGES.get(error["type"], error["msg"][:1].lower() + error["msg"][1:])
    return f'"{field_name}" {detail}'


def validate_perk(payload: Any, mode: ValidationMode) -> Dict[str, Any]:
    """Validate ``payload`` in ``mode`` and return the normalized fields."""
    if not isinstance(payload, Mapping):
        raise ValidationError('"value" must be an object')

    model: type[BaseModel] = _MODELS[mode.name]
    try:
        instance = model.model_validate(dict(payload))
    except SchemaValidationError as exc:
        raise ValidationError(format_error_detail(exc.errors()[0])) from exc

    # Absent keys never show up in ``model_fields_set``; in update mode
    # that is what keeps untouched columns out of the write.
    return instance.model_dump(exclude_unset=not mode.apply_defaults)
