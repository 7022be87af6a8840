from pydantic import ConfigDict, Field, field_validator

from jobly.schemas.base import CamelModel, reject_null

URL_PATTERN = r"^https?://\S+$"


class CompanyCreate(CamelModel):
    handle: str = Field(min_length=1, max_length=25)
    name: str = Field(min_length=1)
    description: str
    num_employees: int | None = Field(None, ge=0)
    logo_url: str | None = Field(None, pattern=URL_PATTERN)


class CompanyUpdate(CamelModel):
    # handle is the key and may not be patched
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1)
    description: str | None = None
    num_employees: int | None = Field(None, ge=0)
    logo_url: str | None = Field(None, pattern=URL_PATTERN)

    @field_validator("name", "description")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class CompanyResponse(CamelModel):
    handle: str
    name: str
    description: str
    num_employees: int | None
    logo_url: str | None


class CompanyJob(CamelModel):
    id: int
    title: str
    salary: int | None
    equity: str | None


class CompanyDetailResponse(CompanyResponse):
    jobs: list[CompanyJob] = []


class CompanyEnvelope(CamelModel):
    company: CompanyResponse


class CompanyDetailEnvelope(CamelModel):
    company: CompanyDetailResponse


class CompanyListResponse(CamelModel):
    companies: list[CompanyResponse]
