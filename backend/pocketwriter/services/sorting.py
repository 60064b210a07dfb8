"""
Sort-parameter handling shared by the list endpoints.

Clients send `sortBy` in either camelCase (createdAt) or snake_case
(created_at) and `sortDir` as asc/desc. Anything else is a ValidationError.
"""

from typing import Tuple

from sqlalchemy import asc, desc
from sqlalchemy.sql.elements import UnaryExpression

from pocketwriter.exceptions import ValidationError

SORTABLE_FIELDS = {
    "id": "id",
    "title": "title",
    "name": "name",
    "createdAt": "created_at",
    "created_at": "created_at",
    "updatedAt": "updated_at",
    "updated_at": "updated_at",
}


def order_clause(model, sort_by: str, sort_dir: str) -> Tuple[UnaryExpression, UnaryExpression]:
    """
    Build ORDER BY clauses for `model`.

    Returns the primary ordering plus an id tie-breaker so pages are stable
    when many rows share a timestamp.
    """
    attribute = SORTABLE_FIELDS.get(sort_by)
    if attribute is None or not hasattr(model, attribute):
        raise ValidationError(
            message=f"Cannot sort by '{sort_by}'",
            field="sortBy",
            context={"allowed": sorted(k for k, v in SORTABLE_FIELDS.items() if hasattr(model, v))},
        )

    direction = sort_dir.lower()
    if direction not in ("asc", "desc"):
        raise ValidationError(
            message=f"Invalid sort direction '{sort_dir}'. Use 'asc' or 'desc'",
            field="sortDir",
        )

    column = getattr(model, attribute)
    if direction == "asc":
        return asc(column), asc(model.id)
    return desc(column), desc(model.id)
