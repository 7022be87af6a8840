"""Typed failures raised by the repositories and the storage client.

Each error carries the HTTP status it maps to; ``main.py`` renders them.
"""


class JoblyError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(JoblyError):
    status_code = 400


class InvalidReferenceError(JoblyError):
    """A create referenced a related entity that does not exist."""

    status_code = 400


class UnauthorizedError(JoblyError):
    status_code = 401


class NotFoundError(JoblyError):
    status_code = 404


class ConflictError(JoblyError):
    status_code = 409


class StorageError(JoblyError):
    status_code = 500


class ConstraintViolationError(StorageError):
    """Storage rejected a write because of a unique, foreign-key, check or not-null constraint.

    SQLite reports e.g. ``UNIQUE constraint failed: companies.name`` or
    ``FOREIGN KEY constraint failed``; ``kind`` and ``target`` are parsed from that.
    """

    status_code = 409

    def __init__(self, message: str):
        super().__init__(message)
        head, sep, target = message.partition(" constraint failed")
        self.kind = head.strip().upper() if sep else None
        self.target = target.lstrip(": ").strip() or None

    def is_unique(self, target: str | None = None) -> bool:
        return self.kind == "UNIQUE" and (target is None or self.target == target)

    def is_foreign_key(self) -> bool:
        return self.kind == "FOREIGN KEY"
