# __init__.py
from app.schemas.company import (
	CompanyDetail,
	CompanyDetailResponse,
	CompanyListResponse,
	CompanyNew,
	CompanyRead,
	CompanyResponse,
	CompanyUpdate,
	DeletedResponse,
)
from app.schemas.job import JobListResponse, JobNew, JobRead, JobResponse, JobUpdate

__all__ = [
	"CompanyDetail",
	"CompanyDetailResponse",
	"CompanyListResponse",
	"CompanyNew",
	"CompanyRead",
	"CompanyResponse",
	"CompanyUpdate",
	"DeletedResponse",
	"JobListResponse",
	"JobNew",
	"JobRead",
	"JobResponse",
	"JobUpdate",
]
