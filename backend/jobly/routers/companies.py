from fastapi import APIRouter, Depends, Query

from jobly.dependencies import get_company_repository, require_admin
from jobly.errors import BadRequestError
from jobly.repositories.company import CompanyRepository
from jobly.schemas.company import (
    CompanyCreate,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListResponse,
    CompanyUpdate,
)
from jobly.services.filters import CompanyFilter

router = APIRouter(prefix="/companies", tags=["companies"])


@router.post("", response_model=CompanyEnvelope, status_code=201, dependencies=[Depends(require_admin)])
async def create_company(req: CompanyCreate, repo: CompanyRepository = Depends(get_company_repository)):
    company = repo.create(req.model_dump(by_alias=True))
    return {"company": company}


@router.get("", response_model=CompanyListResponse)
async def list_companies(
    min_employees: int | None = Query(None, alias="minEmployees", ge=0),
    max_employees: int | None = Query(None, alias="maxEmployees", ge=0),
    name: str | None = None,
    repo: CompanyRepository = Depends(get_company_repository),
):
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    criteria = CompanyFilter(min_employees=min_employees, max_employees=max_employees, name=name)
    return {"companies": repo.find_all(criteria)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
async def get_company(handle: str, repo: CompanyRepository = Depends(get_company_repository)):
    return {"company": repo.get(handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope, dependencies=[Depends(require_admin)])
async def update_company(
    handle: str,
    req: CompanyUpdate,
    repo: CompanyRepository = Depends(get_company_repository),
):
    company = repo.update(handle, req.model_dump(exclude_unset=True, by_alias=True))
    return {"company": company}


@router.delete("/{handle}", dependencies=[Depends(require_admin)])
async def delete_company(handle: str, repo: CompanyRepository = Depends(get_company_repository)):
    repo.remove(handle)
    return {"deleted": handle}
