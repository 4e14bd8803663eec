from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from app.models import job as job_model
from app.routers.dependencies import http_errors, parse_query_filters, require_admin
from app.utils.jwt_handler import TokenClaims
from app.schemas.company import DeletedResponse
from app.schemas.job import JobListResponse, JobNew, JobResponse, JobUpdate


router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(payload: JobNew, _admin: TokenClaims = Depends(require_admin)) -> JobResponse:
    with http_errors():
        job = job_model.create(payload.model_dump(by_alias=True))
    return JobResponse.model_validate({"job": job})


@router.get("", response_model=JobListResponse)
def list_jobs(request: Request) -> JobListResponse:
    """List jobs.

    Optional query filters: title (case-insensitive substring), minSalary,
    hasEquity (true keeps only jobs with non-zero equity).
    """

    filters = parse_query_filters(request.query_params, int_keys=("minSalary",), bool_keys=("hasEquity",))
    with http_errors():
        jobs = job_model.find_all(filters)
    return JobListResponse.model_validate({"jobs": jobs})


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int) -> JobResponse:
    with http_errors():
        job = job_model.get(job_id)
    return JobResponse.model_validate({"job": job})


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: int,
    payload: JobUpdate,
    _admin: TokenClaims = Depends(require_admin),
) -> JobResponse:
    with http_errors():
        job = job_model.update(job_id, payload.model_dump(exclude_unset=True))
    return JobResponse.model_validate({"job": job})


@router.delete("/{job_id}", response_model=DeletedResponse)
def delete_job(job_id: int, _admin: TokenClaims = Depends(require_admin)) -> DeletedResponse:
    with http_errors():
        job_model.remove(job_id)
    return DeletedResponse(deleted=str(job_id))
