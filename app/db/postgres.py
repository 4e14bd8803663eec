from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import psycopg2
from psycopg2.extras import RealDictCursor

from sqlalchemy.engine import make_url

from app.config import settings


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostgresConfig:
    host: str
    port: int
    name: str
    user: str
    password: str


class DatabaseConnectionError(RuntimeError):
    pass


class DatabaseQueryError(RuntimeError):
    pass


_POSITIONAL_PARAM_RE = re.compile(r"\$(\d+)")


def load_postgres_config() -> PostgresConfig:
    """Load PostgreSQL config from application settings.

    DB_URL takes precedence; any part it leaves out falls back to the DB_* settings.
    """

    if settings.db_url:
        url = make_url(settings.db_url)
        return PostgresConfig(
            host=url.host or settings.db_host,
            port=int(url.port or settings.db_port),
            name=url.database or settings.db_name,
            user=url.username or settings.db_user,
            password=url.password or settings.db_password,
        )

    return PostgresConfig(
        host=settings.db_host,
        port=int(settings.db_port),
        name=settings.db_name,
        user=settings.db_user,
        password=settings.db_password,
    )


def get_connection(*, retries: int = 3, backoff_seconds: float = 0.3):
    cfg = load_postgres_config()
    last_exc: Exception | None = None

    for attempt in range(1, retries + 1):
        try:
            conn = psycopg2.connect(
                host=cfg.host,
                port=cfg.port,
                user=cfg.user,
                password=cfg.password,
                dbname=cfg.name,
                cursor_factory=RealDictCursor,
                connect_timeout=5,
            )
            conn.autocommit = True
            return conn
        except psycopg2.OperationalError as exc:
            last_exc = exc
            if attempt < retries:
                logger.warning("postgres.connect attempt=%s/%s failed: %s", attempt, retries, exc)
                time.sleep(backoff_seconds * attempt)
                continue
            raise DatabaseConnectionError(
                "Failed to connect to PostgreSQL after "
                f"{retries} attempts ({cfg.host}:{cfg.port}/{cfg.name}). "
                f"Last error: {type(exc).__name__}: {exc}"
            ) from exc

    raise DatabaseConnectionError("Failed to connect to PostgreSQL") from last_exc


def compile_positional_params(sql: str, params: Sequence[Any]) -> tuple[str, list[Any]]:
    """Rewrite `$1, $2, ...` placeholders into psycopg2's `%s` style.

    Values are emitted in placeholder order, so `$2 ... $1 ... $2` yields
    `[params[1], params[0], params[1]]`.
    """

    order: list[int] = []

    def repl(match: re.Match[str]) -> str:
        order.append(int(match.group(1)))
        return "%s"

    compiled_sql = _POSITIONAL_PARAM_RE.sub(repl, sql)

    # psycopg2 uses `%` formatting for parameter substitution, so any literal
    # percent sign in the SQL text must be doubled.
    sentinel = "__PCT_S_PLACEHOLDER__"
    compiled_sql = compiled_sql.replace("%s", sentinel)
    compiled_sql = compiled_sql.replace("%", "%%")
    compiled_sql = compiled_sql.replace(sentinel, "%s")

    values: list[Any] = []
    for idx in order:
        if idx < 1 or idx > len(params):
            raise DatabaseQueryError(f"Missing SQL parameter: ${idx}")
        values.append(params[idx - 1])
    return compiled_sql, values


def query(sql: str, params: Iterable[Any] | None = None) -> list[dict[str, Any]]:
    """Run a statement and return any result rows as dicts.

    `params` bind to `$n` placeholders by position. Statements without a
    result set (no RETURNING) return an empty list.
    """

    conn = get_connection()

    try:
        with conn.cursor() as cur:
            if params is None:
                cur.execute(sql)
            else:
                compiled_sql, values = compile_positional_params(sql, list(params))
                cur.execute(compiled_sql, values)

            if cur.description is None:
                return []
            return [dict(row) for row in cur.fetchall()]
    except psycopg2.Error as exc:
        raise DatabaseQueryError(f"Database query failed: {exc.pgerror or exc}") from exc
    finally:
        conn.close()


def query_one(sql: str, params: Iterable[Any] | None = None) -> dict[str, Any] | None:
    rows = query(sql, params)
    return rows[0] if rows else None
