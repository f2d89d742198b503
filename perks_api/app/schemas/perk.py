"""
Pydantic schemas for perks.

A perk is a merchant discount offer.  The request models are not
written out by hand: they are generated from ``PERK_FIELDS``, a single
table of per‑field constraints, once for each ``ValidationMode``.
Creation needs a complete, defaulted record while a partial update must
leave untouched fields alone, so the two modes differ only in which
fields are required, whether defaults are applied and how unknown keys
are treated.

API payloads use camelCase (``discountPercent``); the storage layer
and Python attributes use snake_case (``discount_percent``).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated, Any, Dict, FrozenSet, List, Literal, Tuple, Type

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, create_model
from pydantic_core import PydanticCustomError


Category = Literal["food", "tech", "travel", "fitness", "other"]


def _reject_bool(value: Any) -> Any:
    # bool is an int subclass; lax float parsing would turn true into 1.0.
    if isinstance(value, bool):
        raise PydanticCustomError("number_type", "must be a number")
    return value


Percent = Annotated[float, BeforeValidator(_reject_bool)]


@dataclass(frozen=True)
class FieldSpec:
    """Constraints for one writable perk field."""

    column: str
    alias: str
    annotation: Any
    default: Any
    constraints: Dict[str, Any] = field(default_factory=dict)


PERK_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("title", "title", str, None, {"min_length": 2}),
    FieldSpec("description", "description", str, ""),
    FieldSpec("category", "category", Category, "other"),
    FieldSpec("discount_percent", "discountPercent", Percent, 0, {"ge": 0, "le": 100}),
    FieldSpec("merchant", "merchant", str, ""),
)

ALIAS_TO_COLUMN: Dict[str, str] = {entry.alias: entry.column for entry in PERK_FIELDS}


@dataclass(frozen=True)
class ValidationMode:
    """How the shared field table is applied to an input record."""

    name: str
    required_fields: FrozenSet[str]
    apply_defaults: bool
    reject_unknown: bool


STRICT_CREATE = ValidationMode(
    name="strict-create",
    required_fields=frozenset({"title"}),
    apply_defaults=True,
    reject_unknown=True,
)

PARTIAL_UPDATE = ValidationMode(
    name="partial-update",
    required_fields=frozenset(),
    apply_defaults=False,
    reject_unknown=False,
)


def build_perk_model(model_name: str, mode: ValidationMode) -> Type[BaseModel]:
    """Generate a request model for ``mode`` from ``PERK_FIELDS``.

    Optional fields without applied defaults get ``None`` as a sentinel
    default while keeping their non‑optional type, so an explicit
    ``null`` is still rejected and an absent key stays out of
    ``model_fields_set``.
    """
    definitions: Dict[str, Any] = {}
    for entry in PERK_FIELDS:
        if entry.column in mode.required_fields:
            default = ...
        elif mode.apply_defaults:
            default = entry.default
        else:
            default = None
        definitions[entry.column] = (
            entry.annotation,
            Field(default, alias=entry.alias, **entry.constraints),
        )
    config = ConfigDict(extra="forbid" if mode.reject_unknown else "ignore")
    return create_model(model_name, __config__=config, **definitions)


PerkCreate = build_perk_model("PerkCreate", STRICT_CREATE)
PerkUpdate = build_perk_model("PerkUpdate", PARTIAL_UPDATE)


class PerkRead(BaseModel):
    """Schema for reading a perk from the API."""

    id: str
    title: str
    description: str
    category: Category
    discount_percent: float = Field(..., alias="discountPercent")
    merchant: str
    created_at: datetime = Field(..., alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)


class PerkEnvelope(BaseModel):
    """Single‑record response body: ``{"perk": {...}}``."""

    perk: PerkRead


class DeleteConfirmation(BaseModel):
    ok: bool = True


class ErrorMessage(BaseModel):
    message: str


PerkList = List[PerkRead]
