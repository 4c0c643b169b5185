"""Backend-neutral list filter contract.

Both the in-memory and the Supabase repositories evaluate a
:class:`ListFilters` against an entity's :class:`SearchFields`, so the
same filter values select the same rows under either backend:

- ``query``: case-insensitive substring match over ``SearchFields.text``
  OR exact numeric equality over ``SearchFields.numeric`` (only when the
  query parses as a finite number). ``*`` is stripped from the query.
- ``equals``: exact equality per field.
- ``minimum`` / ``maximum``: inclusive numeric bounds per field.
- ``contains``: array field must contain every listed value.

All groups are AND-combined.
"""

import math
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SearchFields:
    """Fields that take part in free-text search for one entity."""

    text: tuple[str, ...] = ()
    numeric: tuple[str, ...] = ()


@dataclass
class ListFilters:
    """Conjunction of filters applied by ``list``."""

    query: str | None = None
    equals: dict[str, Any] = field(default_factory=dict)
    minimum: dict[str, float] = field(default_factory=dict)
    maximum: dict[str, float] = field(default_factory=dict)
    contains: dict[str, list[str]] = field(default_factory=dict)


def normalize_query(query: str | None) -> str | None:
    """Trim the query and drop wildcard characters; empty means no query."""
    if query is None:
        return None
    cleaned = query.replace("*", "").strip()
    return cleaned or None


def numeric_query(query: str | None) -> float | None:
    """The query as a finite number, or None when it is not numeric."""
    if query is None:
        return None
    try:
        value = float(query)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value
