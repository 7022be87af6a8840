import time
from dataclasses import dataclass

from jobly.config import settings
from jobly.utils.security import generate_token


@dataclass(frozen=True)
class Principal:
    username: str
    is_admin: bool
    expires_at: float


class AuthService:
    def __init__(self):
        self._active_tokens: dict[str, Principal] = {}

    def _cleanup_expired(self):
        now = time.time()
        self._active_tokens = {
            t: p for t, p in self._active_tokens.items() if p.expires_at > now
        }

    def issue_token(self, user: dict) -> dict:
        token = generate_token()
        timeout = settings.token_ttl_seconds
        self._active_tokens[token] = Principal(
            username=user["username"],
            is_admin=user["isAdmin"],
            expires_at=time.time() + timeout,
        )
        return {"token": token, "expires_in_seconds": timeout}

    def validate_token(self, token: str) -> Principal | None:
        self._cleanup_expired()
        return self._active_tokens.get(token)

    def revoke_all(self):
        self._active_tokens.clear()


auth_service = AuthService()
