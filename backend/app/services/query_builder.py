"""
Storefront Backend — List Filter Builder
==========================================

What:  Turns recognized query-string keys into a WHERE clause on a SELECT.
How:   Each allowed key present in the request adds `column = :filter_<attr>`
       with a bound parameter; all conditions are ANDed together.
Who:   Called by ResourceService.list_resources().

Only keys in the resource's allow-list are looked at. Any other query-string
key is ignored, so arbitrary field names never reach the statement.

Example:
    GET /user?lastName=Lovelace&role=admin&sort=anything
    →  SELECT ... FROM app_user
       WHERE app_user.last_name = :filter_last_name
         AND app_user.role = :filter_role
       bindings = {"filter_last_name": "Lovelace", "filter_role": "admin"}
"""

from typing import Any, Dict, Mapping, Sequence, Tuple, Type

from sqlalchemy import Select, bindparam, false

from app.exceptions import FieldError, ValidationError
from app.services.validation import (
    INTEGER,
    FieldSpec,
    escape_text,
    in_integer_range,
    is_numeric_id,
)


def _filter_value(spec: FieldSpec, raw: Any) -> Any:
    """Normalize a query-string value the same way stored values were normalized."""
    if spec.kind == INTEGER:
        if not is_numeric_id(raw):
            raise ValueError(spec.invalid_message)
        return int(str(raw))
    return escape_text(str(raw))


def build_filter_clause(
    base_query: Select,
    model: Type[Any],
    params: Mapping[str, Any],
    filters: Sequence[FieldSpec],
) -> Tuple[Select, Dict[str, Any]]:
    """
    Append an AND-combined equality filter for every recognized key.

    Args:
        base_query: Unfiltered SELECT statement
        model:      ORM class whose columns the filters refer to
        params:     Raw query-string parameters
        filters:    Allow-list of filterable fields for this resource

    Returns:
        (query, bindings). With no recognized keys, base_query is returned
        unchanged and bindings is empty. An integer filter above MAX_INTEGER
        adds an always-false condition instead of a binding.

    Raises:
        ValidationError: An integer filter was not digits-only.
    """
    query = base_query
    bindings: Dict[str, Any] = {}
    errors = []

    for spec in filters:
        raw = params.get(spec.name)
        if raw is None or raw == "":
            continue
        try:
            value = _filter_value(spec, raw)
        except ValueError as e:
            errors.append(FieldError(spec.name, str(e)))
            continue

        if spec.kind == INTEGER and not in_integer_range(value):
            # Larger than any stored integer; binding it would overflow the driver
            query = query.where(false())
            continue

        key = f"filter_{spec.attribute}"
        column = getattr(model, spec.attribute)
        query = query.where(column == bindparam(key, value))
        bindings[key] = value

    if errors:
        raise ValidationError(errors)

    return query, bindings
