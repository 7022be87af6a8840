import logging
from typing import Any

from jobly.database import Database
from jobly.errors import ConflictError, ConstraintViolationError, UnauthorizedError
from jobly.utils.security import hash_password, needs_rehash, verify_password

logger = logging.getLogger(__name__)


def _to_user(row: dict[str, Any]) -> dict[str, Any]:
    return {"username": row["username"], "isAdmin": bool(row["is_admin"])}


class UserRepository:
    def __init__(self, db: Database):
        self.db = db

    def create(self, username: str, password: str, is_admin: bool = False) -> dict[str, Any]:
        """Register a user. The password is stored as an argon2 hash.

        Raises ConflictError if the username is taken.
        """
        try:
            rows = self.db.query(
                """INSERT INTO users (username, password, is_admin)
                   VALUES ($1, $2, $3)
                   RETURNING username, is_admin""",
                [username, hash_password(password), int(is_admin)],
            )
        except ConstraintViolationError as exc:
            if not exc.is_unique("users.username"):
                raise
            raise ConflictError(f"Duplicate username: {username}") from exc

        logger.info("Registered user %s (admin=%s)", username, is_admin)
        return _to_user(rows[0])

    def exists(self, username: str) -> bool:
        return bool(self.db.query("SELECT username FROM users WHERE username = $1", [username]))

    def authenticate(self, username: str, password: str) -> dict[str, Any]:
        rows = self.db.query(
            "SELECT username, password, is_admin FROM users WHERE username = $1",
            [username],
        )
        stored_hash = rows[0]["password"] if rows else None
        if not verify_password(stored_hash, password):
            raise UnauthorizedError("Invalid username/password")

        if needs_rehash(stored_hash):
            self.db.query(
                "UPDATE users SET password = $1 WHERE username = $2",
                [hash_password(password), username],
            )
            logger.info("Upgraded password hash for %s", username)
        return _to_user(rows[0])
