from fastapi import APIRouter, Depends, Query

from jobly.dependencies import get_job_repository, require_admin
from jobly.repositories.job import JobRepository
from jobly.schemas.job import JobCreate, JobEnvelope, JobListResponse, JobUpdate
from jobly.services.filters import JobFilter

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("", response_model=JobEnvelope, status_code=201, dependencies=[Depends(require_admin)])
async def create_job(req: JobCreate, repo: JobRepository = Depends(get_job_repository)):
    job = repo.create(req.model_dump(by_alias=True, mode="json"))
    return {"job": job}


@router.get("", response_model=JobListResponse)
async def list_jobs(
    title: str | None = None,
    min_salary: int | None = Query(None, alias="minSalary", ge=0),
    has_equity: bool | None = Query(None, alias="hasEquity"),
    repo: JobRepository = Depends(get_job_repository),
):
    criteria = JobFilter(title=title, min_salary=min_salary, has_equity=has_equity)
    return {"jobs": repo.find_all(criteria)}


@router.get("/{job_id}", response_model=JobEnvelope)
async def get_job(job_id: int, repo: JobRepository = Depends(get_job_repository)):
    return {"job": repo.get(job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(require_admin)])
async def update_job(job_id: int, req: JobUpdate, repo: JobRepository = Depends(get_job_repository)):
    job = repo.update(job_id, req.model_dump(exclude_unset=True, by_alias=True, mode="json"))
    return {"job": job}


@router.delete("/{job_id}", dependencies=[Depends(require_admin)])
async def delete_job(job_id: int, repo: JobRepository = Depends(get_job_repository)):
    repo.remove(job_id)
    return {"deleted": job_id}
