from __future__ import annotations

import os
from typing import Any, Iterable

import pytest
from fastapi.testclient import TestClient


def pytest_configure() -> None:
    # Keep a local .env out of the test run.
    os.environ["ENVIRONMENT"] = "test"
    os.environ.setdefault("JWT_SECRET", "test-secret")
    os.environ.setdefault("LOG_LEVEL", "WARNING")


def normalize_sql(sql: str) -> str:
    return " ".join((sql or "").split())


class FakeDB:
    """Stands in for `app.db.postgres.query`/`query_one` in the model modules.

    Every call is recorded as `(normalized_sql, params)`. Rows are served from
    the first registered fragment contained in the SQL; unmatched SQL yields [].
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[Any] | None]] = []
        self._responses: list[tuple[str, Any]] = []

    def respond(self, fragment: str, rows: list[dict[str, Any]] | Exception) -> None:
        self._responses.append((normalize_sql(fragment), rows))

    def query(self, sql: str, params: Iterable[Any] | None = None) -> list[dict[str, Any]]:
        normalized = normalize_sql(sql)
        self.calls.append((normalized, list(params) if params is not None else None))
        for fragment, rows in self._responses:
            if fragment in normalized:
                if isinstance(rows, Exception):
                    raise rows
                return [dict(row) for row in rows]
        return []

    def query_one(self, sql: str, params: Iterable[Any] | None = None) -> dict[str, Any] | None:
        rows = self.query(sql, params)
        return rows[0] if rows else None

    def last(self, fragment: str) -> tuple[str, list[Any] | None]:
        fragment = normalize_sql(fragment)
        for sql, params in reversed(self.calls):
            if fragment in sql:
                return sql, params
        raise AssertionError(f"no query containing {fragment!r}; saw {[c[0] for c in self.calls]}")


@pytest.fixture()
def fake_db(monkeypatch: pytest.MonkeyPatch) -> FakeDB:
    from app.models import company, job

    db = FakeDB()
    for module in (company, job):
        monkeypatch.setattr(module, "query", db.query)
        monkeypatch.setattr(module, "query_one", db.query_one)
    return db


@pytest.fixture()
def client() -> Any:
    from app.main import create_app

    with TestClient(create_app()) as c:
        yield c


def _auth_headers(*, username: str, is_admin: bool) -> dict[str, str]:
    from app.utils.jwt_handler import create_access_token

    token = create_access_token(username, is_admin=is_admin)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers() -> dict[str, str]:
    return _auth_headers(username="admin", is_admin=True)


@pytest.fixture()
def user_headers() -> dict[str, str]:
    return _auth_headers(username="u1", is_admin=False)
