from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from app.errors import BadRequestError


@dataclass(frozen=True)
class SqlFragment:
    """A SQL clause plus the values bound to its `$n` placeholders.

    The Nth placeholder (`$N`) in `clause` binds `values[N - 1]`.
    """

    clause: str
    values: list[Any] = field(default_factory=list)


def sql_for_partial_update(data: Mapping[str, Any], column_map: Mapping[str, str] | None = None) -> SqlFragment:
    """Build the SET clause of a partial UPDATE.

    Keys are resolved through `column_map`; a key without an entry is used as
    the column name verbatim:

        {"firstName": "Aliya", "age": 32}, {"firstName": "first_name"}
        -> '"first_name"=$1, "age"=$2', ["Aliya", 32]

    Column names are interpolated into the SQL text, so callers must only pass
    allow-listed keys. Values are always bound as parameters.

    Raises BadRequestError if `data` is empty.
    """

    if not data:
        raise BadRequestError("No data")

    column_map = column_map or {}
    cols = [f'"{column_map.get(key, key)}"=${idx}' for idx, key in enumerate(data, start=1)]

    return SqlFragment(clause=", ".join(cols), values=list(data.values()))
