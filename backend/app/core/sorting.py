"""Shared ordering helper for repository listings."""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

from app.core.database import Base


def apply_order_by(
    query: Query,  # type: ignore[type-arg]
    model: type[Base],
    order_by: str | None,
    allowed_fields: Collection[str] | None = None,
    default_field: str = "created_at",
    default_direction: str = "desc",
) -> Query:  # type: ignore[type-arg]
    """Apply ordering to a SQLAlchemy query.

    Args:
        query: The SQLAlchemy query to sort.
        model: The mapped class whose column is sorted on.
        order_by: Sort string in "field:direction" format (e.g. "name:asc").
            Unknown fields or directions fall back to the defaults.
        allowed_fields: Column names a caller may sort by. ``None`` allows
            any attribute present on the model.
        default_field: Column used when ``order_by`` is missing or rejected.
        default_direction: "asc" or "desc".

    Returns:
        The query with ordering applied, ``id`` as the tie-breaker.
    """
    field = default_field
    direction = default_direction

    if order_by:
        parts = order_by.split(":", 1)
        candidate_field = parts[0]
        candidate_direction = parts[1] if len(parts) > 1 else "asc"

        permitted = allowed_fields is None or candidate_field in allowed_fields
        if permitted and hasattr(model, candidate_field):
            field = candidate_field
            if candidate_direction in ("asc", "desc"):
                direction = candidate_direction

    column = getattr(model, field)
    order_func = asc if direction == "asc" else desc
    # Tie-breaker keeps offset pagination stable when timestamps collide.
    return query.order_by(order_func(column), order_func(model.id))
