from fastapi import Depends, Header, HTTPException

from jobly.database import Database, get_db
from jobly.repositories.company import CompanyRepository
from jobly.repositories.job import JobRepository
from jobly.repositories.user import UserRepository
from jobly.services.auth_service import Principal, auth_service


def get_company_repository(db: Database = Depends(get_db)) -> CompanyRepository:
    return CompanyRepository(db)


def get_job_repository(db: Database = Depends(get_db)) -> JobRepository:
    return JobRepository(db)


def get_user_repository(db: Database = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


async def require_user(authorization: str | None = Header(None)) -> Principal:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")
    principal = auth_service.validate_token(authorization[7:])
    if principal is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return principal


async def require_admin(principal: Principal = Depends(require_user)) -> Principal:
    if not principal.is_admin:
        raise HTTPException(status_code=403, detail="Admin privileges required")
    return principal
