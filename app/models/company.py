"""Data access for companies.

All SQL is executed through `app.db.postgres.query`; rows come back keyed by
the API's camelCase field names.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from app.db.postgres import query, query_one
from app.errors import BadRequestError, NotFoundError
from app.helpers.sql import SqlFragment, sql_for_partial_update
from app.models import job


logger = logging.getLogger(__name__)

FILTER_KEYS = frozenset({"name", "minEmployees", "maxEmployees"})

# API field -> column, for fields whose names differ.
COLUMN_MAP: dict[str, str] = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

_COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'


def company_filter_sql(filters: Mapping[str, Any]) -> SqlFragment:
    """Build the WHERE predicate for a company search.

    Accepted filters: `name` (case-insensitive substring), `maxEmployees`,
    `minEmployees`. Fragments are emitted in that order regardless of the
    payload's key order, and joined with AND. An empty payload yields an
    empty clause.

    Raises BadRequestError on an unknown filter key, or when
    maxEmployees < minEmployees.
    """

    for key in filters:
        if key not in FILTER_KEYS:
            raise BadRequestError("Invalid filters included")

    if (
        filters.get("maxEmployees") is not None
        and filters.get("minEmployees") is not None
        and filters["maxEmployees"] < filters["minEmployees"]
    ):
        raise BadRequestError("Max/min employees filters are not valid")

    values: list[Any] = []
    where: list[str] = []

    if filters.get("name") is not None:
        values.append(f"%{filters['name']}%")
        where.append(f"name ILIKE ${len(values)}")

    if filters.get("maxEmployees") is not None:
        values.append(filters["maxEmployees"])
        where.append(f"num_employees <= ${len(values)}")

    if filters.get("minEmployees") is not None:
        values.append(filters["minEmployees"])
        where.append(f"num_employees >= ${len(values)}")

    return SqlFragment(clause=" AND ".join(where), values=values)


def _check_name_available(name: str, *, exclude_handle: str | None = None) -> None:
    taken = query_one(
        "SELECT handle FROM companies WHERE name = $1 AND handle IS DISTINCT FROM $2",
        [name, exclude_handle],
    )
    if taken:
        raise BadRequestError(f"Duplicate company name: {name}")


def create(data: Mapping[str, Any]) -> dict[str, Any]:
    """Insert a company; raises BadRequestError if the handle or name is taken."""

    handle = data["handle"]
    duplicate = query_one("SELECT handle FROM companies WHERE handle = $1", [handle])
    if duplicate:
        raise BadRequestError(f"Duplicate company: {handle}")
    _check_name_available(data["name"])

    row = query_one(
        f"""
        INSERT INTO companies (handle, name, description, num_employees, logo_url)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING {_COLUMNS}
        """.strip(),
        [
            handle,
            data["name"],
            data["description"],
            data.get("numEmployees"),
            data.get("logoUrl"),
        ],
    )
    logger.info("company.create handle=%s", handle)
    return row


def find_all(filters: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
    """List companies ordered by name, optionally narrowed by search filters."""

    where = company_filter_sql(filters or {})
    sql = f"SELECT {_COLUMNS} FROM companies"
    if where.clause:
        sql += f" WHERE {where.clause}"
    sql += " ORDER BY name"

    logger.debug("company.find_all sql=%s values=%s", sql, where.values)
    return query(sql, where.values)


def get(handle: str) -> dict[str, Any]:
    """Return a company with its jobs; raises NotFoundError if missing."""

    company = query_one(f"SELECT {_COLUMNS} FROM companies WHERE handle = $1", [handle])
    if not company:
        raise NotFoundError(f"No company: {handle}")

    company["jobs"] = job.get_by_company(handle)
    return company


def update(handle: str, data: Mapping[str, Any]) -> dict[str, Any]:
    """Partially update a company.

    Only the fields present in `data` change. Allowed fields: name,
    description, numEmployees, logoUrl.
    """

    set_cols = sql_for_partial_update(data, COLUMN_MAP)
    if "name" in data:
        _check_name_available(data["name"], exclude_handle=handle)
    handle_idx = f"${len(set_cols.values) + 1}"

    sql = f"""
        UPDATE companies
        SET {set_cols.clause}
        WHERE handle = {handle_idx}
        RETURNING {_COLUMNS}
        """.strip()
    company = query_one(sql, [*set_cols.values, handle])
    if not company:
        raise NotFoundError(f"No company: {handle}")

    logger.info("company.update handle=%s fields=%s", handle, list(data))
    return company


def remove(handle: str) -> None:
    row = query_one("DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle])
    if not row:
        raise NotFoundError(f"No company: {handle}")
    logger.info("company.remove handle=%s", handle)
