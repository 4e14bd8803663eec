# dependencies.py
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.db.postgres import DatabaseConnectionError, DatabaseQueryError
from app.errors import AppError
from app.utils.jwt_handler import TokenClaims, decode_access_token


bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenClaims:
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return decode_access_token(credentials.credentials)


def require_admin(current_user: TokenClaims = Depends(get_current_user)) -> TokenClaims:
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user


_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}


def parse_query_filters(
    raw: Mapping[str, str],
    *,
    int_keys: Iterable[str] = (),
    bool_keys: Iterable[str] = (),
) -> dict[str, Any]:
    """Coerce query-string filter values to the types the filter builders expect.

    Keys not named in `int_keys`/`bool_keys` are passed through untouched, so
    unknown filters still reach (and are rejected by) the builders.
    """

    int_keys = set(int_keys)
    bool_keys = set(bool_keys)
    filters: dict[str, Any] = {}

    for key, value in raw.items():
        if key in int_keys:
            try:
                filters[key] = int(value)
            except ValueError as exc:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"{key} must be an integer",
                ) from exc
        elif key in bool_keys:
            lowered = value.strip().lower()
            if lowered in _TRUE_VALUES:
                filters[key] = True
            elif lowered in _FALSE_VALUES:
                filters[key] = False
            else:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"{key} must be true or false",
                )
        else:
            filters[key] = value

    return filters


@contextmanager
def http_errors() -> Iterator[None]:
    """Map domain and database errors raised inside the block onto HTTPException."""

    try:
        yield
    except AppError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    except DatabaseConnectionError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except DatabaseQueryError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database query failed",
        ) from exc
