from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import build_db_url, mask_db_url, settings
from app.db.postgres import DatabaseConnectionError, DatabaseQueryError, query_one


router = APIRouter(prefix="/health", tags=["health"])


class HealthStatus(BaseModel):
    status: str
    timestamp: datetime


class DBHealthStatus(BaseModel):
    postgres: str
    db_url: str
    timestamp: datetime


@router.get("/", response_model=HealthStatus, summary="API heartbeat")
def health_check() -> HealthStatus:
    return HealthStatus(status="ok", timestamp=datetime.now(timezone.utc))


@router.get("/db", response_model=DBHealthStatus, summary="DB connectivity check")
def db_health_check() -> DBHealthStatus:
    postgres_status = "ok"
    try:
        query_one("SELECT 1 AS ok")
    except (DatabaseConnectionError, DatabaseQueryError):
        postgres_status = "error"

    return DBHealthStatus(
        postgres=postgres_status,
        db_url=mask_db_url(build_db_url(settings)),
        timestamp=datetime.now(timezone.utc),
    )
