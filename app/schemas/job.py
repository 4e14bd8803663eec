from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JobNew(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    title: str = Field(min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: Decimal | None = Field(default=None, ge=0, le=1)
    company_handle: str = Field(alias="companyHandle", min_length=1, max_length=25)


class JobUpdate(BaseModel):
    """Fields a PATCH may touch; a job's id and company are fixed."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: Decimal | None = Field(default=None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def _reject_null_title(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class JobRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    salary: int | None = None
    equity: Decimal | None = None
    company_handle: str = Field(alias="companyHandle")


class JobResponse(BaseModel):
    job: JobRead


class JobListResponse(BaseModel):
    jobs: list[JobRead]
