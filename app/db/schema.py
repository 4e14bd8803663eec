from __future__ import annotations

from app.db.postgres import query


SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS companies (
      handle VARCHAR(25) PRIMARY KEY CHECK (handle = lower(handle)),
      name TEXT UNIQUE NOT NULL,
      num_employees INTEGER CHECK (num_employees >= 0),
      description TEXT NOT NULL,
      logo_url TEXT
    )
    """.strip(),
    """
    CREATE TABLE IF NOT EXISTS jobs (
      id SERIAL PRIMARY KEY,
      title TEXT NOT NULL,
      salary INTEGER CHECK (salary >= 0),
      equity NUMERIC CHECK (equity <= 1.0),
      company_handle VARCHAR(25) NOT NULL
        REFERENCES companies ON DELETE CASCADE
    )
    """.strip(),
)


def create_tables() -> None:
    for statement in SCHEMA_STATEMENTS:
        query(statement)


def drop_tables() -> None:
    query("DROP TABLE IF EXISTS jobs")
    query("DROP TABLE IF EXISTS companies")
