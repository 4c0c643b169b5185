"""Encode ListFilters as PostgREST query parameters.

Mirrors ``infrastructure.memory.filtering`` so both backends select the
same rows:

- free text becomes ``or=(title.ilike."*q*",city.ilike."*q*",capacity_kw.eq.5)``
  with LIKE wildcards in the query escaped, so ``%`` and ``_`` are literal;
- equality, bounds and array containment become ``eq``, ``gte``, ``lte``
  and ``cs`` filters, AND-combined by PostgREST.
"""

from typing import Any

from domain.repositories.filters import ListFilters, SearchFields, normalize_query, numeric_query

Params = list[tuple[str, str]]


def quote(value: str) -> str:
    """Double-quote a value for use inside ``or=(...)`` or an array literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def like_pattern(query: str) -> str:
    """Substring pattern for ``ilike`` with LIKE metacharacters escaped."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"*{escaped}*"


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def encode_filters(filters: ListFilters | None, fields: SearchFields) -> Params:
    """PostgREST parameters for a conjunction of filters."""
    params: Params = []
    if filters is None:
        return params

    query = normalize_query(filters.query)
    if query is not None:
        clauses = [f"{name}.ilike.{quote(like_pattern(query))}" for name in fields.text]
        number = numeric_query(query)
        if number is not None:
            clauses += [f"{name}.eq.{format_number(number)}" for name in fields.numeric]
        params.append(("or", f"({','.join(clauses)})"))

    for name, value in filters.equals.items():
        params.append((name, f"eq.{format_value(value)}"))
    for name, bound in filters.minimum.items():
        params.append((name, f"gte.{format_number(bound)}"))
    for name, bound in filters.maximum.items():
        params.append((name, f"lte.{format_number(bound)}"))
    for name, values in filters.contains.items():
        members = ",".join(quote(v) for v in values)
        params.append((name, f"cs.{{{members}}}"))

    return params
