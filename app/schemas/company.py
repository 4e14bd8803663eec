from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.job import JobRead


def _validate_logo_url(v: str | None) -> str | None:
    if v is None:
        return v
    value = v.strip()
    if not value.startswith(("http://", "https://", "/")):
        raise ValueError("logoUrl must be an http(s) URL or an absolute path")
    return value


class CompanyNew(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    handle: str = Field(min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(min_length=1)
    description: str
    num_employees: int | None = Field(default=None, alias="numEmployees", ge=0)
    logo_url: str | None = Field(default=None, alias="logoUrl")

    @field_validator("logo_url")
    @classmethod
    def _check_logo_url(cls, v: str | None) -> str | None:
        return _validate_logo_url(v)


class CompanyUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    num_employees: int | None = Field(default=None, alias="numEmployees", ge=0)
    logo_url: str | None = Field(default=None, alias="logoUrl")

    @field_validator("name", "description")
    @classmethod
    def _reject_null(cls, v: str | None) -> str:
        # Omit the field to leave it unchanged; these columns are NOT NULL.
        if v is None:
            raise ValueError("may be omitted but not null")
        return v

    @field_validator("logo_url")
    @classmethod
    def _check_logo_url(cls, v: str | None) -> str | None:
        return _validate_logo_url(v)


class CompanyRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    handle: str
    name: str
    description: str
    num_employees: int | None = Field(default=None, alias="numEmployees")
    logo_url: str | None = Field(default=None, alias="logoUrl")


class CompanyDetail(CompanyRead):
    jobs: list[JobRead] = Field(default_factory=list)


class CompanyResponse(BaseModel):
    company: CompanyRead


class CompanyDetailResponse(BaseModel):
    company: CompanyDetail


class CompanyListResponse(BaseModel):
    companies: list[CompanyRead]


class DeletedResponse(BaseModel):
    deleted: str
