"""Data access for jobs."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from app.db.postgres import query, query_one
from app.errors import BadRequestError, NotFoundError
from app.helpers.sql import SqlFragment, sql_for_partial_update


logger = logging.getLogger(__name__)

FILTER_KEYS = frozenset({"title", "minSalary", "hasEquity"})

MAX_EQUITY_FILTER = 0.1

_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def job_filter_sql(filters: Mapping[str, Any]) -> SqlFragment:
    """Build the WHERE predicate for a job search.

    Accepted filters, emitted in this order and joined with AND:

    - `title`: case-insensitive substring match
    - `minSalary`: salary >= value
    - `hasEquity`: only when exactly True, keeps jobs with non-zero equity

    Raises BadRequestError on an unknown filter key.
    """

    for key in filters:
        if key not in FILTER_KEYS:
            raise BadRequestError("Invalid filters included")

    # Unreachable while `equity` is outside FILTER_KEYS.
    if filters.get("equity") is not None and filters["equity"] >= MAX_EQUITY_FILTER:
        raise BadRequestError("Invalid equity")

    values: list[Any] = []
    where: list[str] = []

    if filters.get("title") is not None:
        values.append(f"%{filters['title']}%")
        where.append(f"title ILIKE ${len(values)}")

    if filters.get("minSalary") is not None:
        values.append(filters["minSalary"])
        where.append(f"salary >= ${len(values)}")

    if filters.get("hasEquity") is True:
        where.append("equity IS NOT NULL AND equity > 0")

    return SqlFragment(clause=" AND ".join(where), values=values)


def create(data: Mapping[str, Any]) -> dict[str, Any]:
    title = data["title"]
    company_handle = data["companyHandle"]

    duplicate = query_one("SELECT id FROM jobs WHERE title = $1", [title])
    if duplicate:
        raise BadRequestError(f"Duplicate job: {title}")

    company = query_one("SELECT handle FROM companies WHERE handle = $1", [company_handle])
    if not company:
        raise BadRequestError(f"No company: {company_handle}")

    row = query_one(
        f"""
        INSERT INTO jobs (title, salary, equity, company_handle)
        VALUES ($1, $2, $3, $4)
        RETURNING {_COLUMNS}
        """.strip(),
        [title, data.get("salary"), data.get("equity"), company_handle],
    )
    logger.info("job.create id=%s company=%s", row["id"] if row else None, company_handle)
    return row


def find_all(filters: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
    where = job_filter_sql(filters or {})
    sql = f"SELECT {_COLUMNS} FROM jobs"
    if where.clause:
        sql += f" WHERE {where.clause}"
    sql += " ORDER BY title"

    logger.debug("job.find_all sql=%s values=%s", sql, where.values)
    return query(sql, where.values)


def get(job_id: int) -> dict[str, Any]:
    job = query_one(f"SELECT {_COLUMNS} FROM jobs WHERE id = $1", [job_id])
    if not job:
        raise NotFoundError(f"No job: {job_id}")
    return job


def get_by_company(company_handle: str) -> list[dict[str, Any]]:
    return query(
        f"SELECT {_COLUMNS} FROM jobs WHERE company_handle = $1 ORDER BY title",
        [company_handle],
    )


def update(job_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
    """Partially update a job's title, salary and/or equity.

    The id and company of a job never change.
    """

    set_cols = sql_for_partial_update(data, {})
    id_idx = f"${len(set_cols.values) + 1}"

    sql = f"""
        UPDATE jobs
        SET {set_cols.clause}
        WHERE id = {id_idx}
        RETURNING {_COLUMNS}
        """.strip()
    job = query_one(sql, [*set_cols.values, job_id])
    if not job:
        raise NotFoundError(f"No job: {job_id}")

    logger.info("job.update id=%s fields=%s", job_id, list(data))
    return job


def remove(job_id: int) -> None:
    row = query_one("DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
    if not row:
        raise NotFoundError(f"No job: {job_id}")
    logger.info("job.remove id=%s", job_id)
