from pydantic import Field

from jobly.schemas.base import CamelModel


class LoginRequest(CamelModel):
    username: str
    password: str


class RegisterRequest(CamelModel):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=8)


class TokenResponse(CamelModel):
    token: str
    expires_in_seconds: int
