"""
Storefront Backend — Request Validation
=========================================

What:  Field-level validation and normalization for resource payloads.
How:   Each resource describes its fields as FieldSpec records; validate_fields()
       runs every rule against a raw JSON mapping and returns the cleaned
       column values together with every FieldError found.
Who:   Called by ResourceService before any statement is executed, and by the
       query builder to normalize filter values.

Rules:
    text     → must be a string; required fields must be non-empty after escaping
    email    → text rules + structural email syntax (email-validator)
    integer  → ASCII digits only (no sign, no decimal point), at most MAX_INTEGER
    decimal  → finite decimal >= 0 that fits NUMERIC(10, 2), no surrounding spaces
    id       → on update only, digits only; ids above MAX_INTEGER match no row

Escaping:
    Text is HTML-escaped before it is checked and before it is stored, so the
    persisted value can differ from what the client sent ("<b>" → "&lt;b&gt;").
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Sequence

from email_validator import EmailNotValidError, validate_email

from app.exceptions import FieldError, ValidationError

# ── Field Kinds ───────────────────────────────────────────────────────────
TEXT = "text"
EMAIL = "email"
INTEGER = "integer"
DECIMAL = "decimal"

# Entities match validator.js escape()
_ESCAPE_TABLE = str.maketrans({
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#x27;",
    "<": "&lt;",
    ">": "&gt;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
})

_DIGITS = re.compile(r"[0-9]+")

# Integer columns are 32-bit signed on every supported store
MAX_INTEGER = 2**31 - 1

# Exclusive upper bound of a NUMERIC(10, 2) column
MAX_DECIMAL = Decimal(10) ** 8


def escape_text(value: str) -> str:
    """HTML/attribute-escape a string in a single pass."""
    return value.translate(_ESCAPE_TABLE)


def is_numeric_id(value: Any) -> bool:
    """True when str(value) is one or more ASCII digits."""
    if value is None or isinstance(value, bool):
        return False
    return _DIGITS.fullmatch(str(value)) is not None


def in_integer_range(value: int) -> bool:
    return 0 <= value <= MAX_INTEGER


def is_valid_email(value: str) -> bool:
    """Structural email check; no DNS lookups."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


@dataclass(frozen=True)
class FieldSpec:
    """
    Description of one client-visible field.

    Attributes:
        name:      JSON / query-string key (camelCase)
        attribute: ORM attribute and column name (snake_case)
        kind:      One of TEXT, EMAIL, INTEGER, DECIMAL
        required:  Absent or null values fail validation when True
        default:   Stored when an optional field is absent or null
        unique_message: When set, creation checks the store for an existing
                   row with the same value and reports this message
    """
    name: str
    attribute: str
    kind: str = TEXT
    required: bool = True
    default: Any = None
    unique_message: Optional[str] = None

    @property
    def invalid_message(self) -> str:
        return f"invalid {self.name}"


@dataclass
class ValidationResult:
    """Cleaned values keyed by ORM attribute, plus every error found."""
    values: Dict[str, Any] = field(default_factory=dict)
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def clean_value(spec: FieldSpec, raw: Any) -> Any:
    """
    Normalize one raw value according to its field kind.

    Returns the value to store. Raises ValueError when the value breaks the
    field's rule.
    """
    if spec.kind in (TEXT, EMAIL):
        if not isinstance(raw, str):
            raise ValueError(spec.invalid_message)
        escaped = escape_text(raw)
        if spec.required and escaped == "":
            raise ValueError(spec.invalid_message)
        if spec.kind == EMAIL and not is_valid_email(escaped):
            raise ValueError(spec.invalid_message)
        return escaped

    if spec.kind == INTEGER:
        if not is_numeric_id(raw):
            raise ValueError(spec.invalid_message)
        number = int(str(raw))
        if not in_integer_range(number):
            raise ValueError(spec.invalid_message)
        return number

    if spec.kind == DECIMAL:
        if isinstance(raw, bool) or not isinstance(raw, (int, float, str, Decimal)):
            raise ValueError(spec.invalid_message)
        text = str(raw)
        # Decimal() itself tolerates surrounding whitespace
        if text != text.strip():
            raise ValueError(spec.invalid_message)
        try:
            number = Decimal(text)
        except InvalidOperation:
            raise ValueError(spec.invalid_message)
        if not number.is_finite() or number.is_signed() or number >= MAX_DECIMAL:
            raise ValueError(spec.invalid_message)
        return number

    raise ValueError(f"unknown field kind '{spec.kind}'")


def validate_fields(
    specs: Sequence[FieldSpec],
    fields: Mapping[str, Any],
    is_update: bool = False,
) -> ValidationResult:
    """
    Validate a raw payload for create (is_update=False) or update.

    Every rule runs; a failure never stops the remaining checks. On update
    the payload must also carry a digits-only "id", returned as values["id"].
    """
    result = ValidationResult()

    if is_update:
        raw_id = fields.get("id")
        if is_numeric_id(raw_id):
            result.values["id"] = int(str(raw_id))
        else:
            result.errors.append(FieldError("id", "invalid id"))

    for spec in specs:
        raw = fields.get(spec.name)
        if raw is None and not spec.required:
            result.values[spec.attribute] = spec.default
            continue
        try:
            result.values[spec.attribute] = clean_value(spec, raw)
        except ValueError as e:
            result.errors.append(FieldError(spec.name, str(e)))

    return result


def validate_id(raw: Any) -> int:
    """
    Check an id taken from the URL path.

    Raises ValidationError("invalid id parameter") for anything but digits.
    The result may exceed MAX_INTEGER; such an id names no row, see
    in_integer_range().
    """
    if not is_numeric_id(raw):
        raise ValidationError([FieldError("id", "invalid id parameter")])
    return int(str(raw))
