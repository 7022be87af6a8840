from decimal import Decimal

from pydantic import ConfigDict, Field, field_validator

from jobly.schemas.base import CamelModel, reject_null


class JobCreate(CamelModel):
    title: str = Field(min_length=1)
    salary: int | None = Field(None, ge=0)
    equity: Decimal | None = Field(None, ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=25)


class JobUpdate(CamelModel):
    # id and companyHandle are fixed at creation
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1)
    salary: int | None = Field(None, ge=0)
    equity: Decimal | None = Field(None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class JobResponse(CamelModel):
    id: int
    title: str
    salary: int | None
    equity: str | None
    company_handle: str


class JobEnvelope(CamelModel):
    job: JobResponse


class JobListResponse(CamelModel):
    jobs: list[JobResponse]
