from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from app.models import company as company_model
from app.routers.dependencies import http_errors, parse_query_filters, require_admin
from app.utils.jwt_handler import TokenClaims
from app.schemas.company import (
    CompanyDetailResponse,
    CompanyListResponse,
    CompanyNew,
    CompanyResponse,
    CompanyUpdate,
    DeletedResponse,
)


router = APIRouter(prefix="/companies", tags=["companies"])


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
def create_company(
    payload: CompanyNew,
    _admin: TokenClaims = Depends(require_admin),
) -> CompanyResponse:
    with http_errors():
        company = company_model.create(payload.model_dump(by_alias=True))
    return CompanyResponse.model_validate({"company": company})


@router.get("", response_model=CompanyListResponse)
def list_companies(request: Request) -> CompanyListResponse:
    """List companies.

    Optional query filters: name (case-insensitive substring), minEmployees,
    maxEmployees.
    """

    filters = parse_query_filters(request.query_params, int_keys=("minEmployees", "maxEmployees"))
    with http_errors():
        companies = company_model.find_all(filters)
    return CompanyListResponse.model_validate({"companies": companies})


@router.get("/{handle}", response_model=CompanyDetailResponse)
def get_company(handle: str) -> CompanyDetailResponse:
    with http_errors():
        company = company_model.get(handle)
    return CompanyDetailResponse.model_validate({"company": company})


@router.patch("/{handle}", response_model=CompanyResponse)
def update_company(
    handle: str,
    payload: CompanyUpdate,
    _admin: TokenClaims = Depends(require_admin),
) -> CompanyResponse:
    with http_errors():
        company = company_model.update(handle, payload.model_dump(by_alias=True, exclude_unset=True))
    return CompanyResponse.model_validate({"company": company})


@router.delete("/{handle}", response_model=DeletedResponse)
def delete_company(handle: str, _admin: TokenClaims = Depends(require_admin)) -> DeletedResponse:
    with http_errors():
        company_model.remove(handle)
    return DeletedResponse(deleted=handle)
