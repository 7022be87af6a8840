import secrets
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from jobly.config import settings

ph = PasswordHasher(
    time_cost=settings.password_time_cost,
    memory_cost=settings.password_memory_cost,
    parallelism=4,
)

# Verified against when the username is unknown, so a miss costs as much as a wrong password.
_UNKNOWN_USER_HASH = ph.hash(secrets.token_hex(16))


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(stored_hash: str | None, password: str) -> bool:
    """Check ``password`` against ``stored_hash``; ``None`` means no such user."""
    try:
        return ph.verify(stored_hash or _UNKNOWN_USER_HASH, password) and stored_hash is not None
    except (VerificationError, InvalidHashError):
        return False


def needs_rehash(stored_hash: str) -> bool:
    """True when the hash was made with older work factors than the current settings."""
    try:
        return ph.check_needs_rehash(stored_hash)
    except InvalidHashError:
        return True


def generate_token() -> str:
    return secrets.token_hex(32)
