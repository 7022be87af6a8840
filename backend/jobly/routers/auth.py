from fastapi import APIRouter, Depends

from jobly.dependencies import get_user_repository
from jobly.repositories.user import UserRepository
from jobly.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from jobly.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token", response_model=TokenResponse)
async def login(req: LoginRequest, users: UserRepository = Depends(get_user_repository)):
    user = users.authenticate(req.username, req.password)
    return TokenResponse(**auth_service.issue_token(user))


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(req: RegisterRequest, users: UserRepository = Depends(get_user_repository)):
    # self-registration never grants admin
    user = users.create(req.username, req.password)
    return TokenResponse(**auth_service.issue_token(user))
