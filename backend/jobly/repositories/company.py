import logging
from typing import Any

from jobly.database import Database
from jobly.errors import ConflictError, ConstraintViolationError, NotFoundError
from jobly.services.filters import CompanyFilter, filter_companies
from jobly.utils.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

# Only the fields whose column differs. handle is never updatable.
COLUMN_NAMES = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COMPANY_COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'


def _unique_conflict(exc: ConstraintViolationError, handle: str, name: str | None) -> ConflictError | None:
    """ConflictError for a unique-key violation, None for any other constraint failure."""
    if exc.is_unique("companies.handle"):
        return ConflictError(f"Duplicate company: {handle}")
    if exc.is_unique("companies.name"):
        return ConflictError(f"Duplicate company name: {name}")
    return None


class CompanyRepository:
    def __init__(self, db: Database):
        self.db = db

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a company and return it.

        data should be {handle, name, description, numEmployees, logoUrl}.
        Raises ConflictError if the handle (or name) is already taken.
        """
        handle = data["handle"]
        try:
            with self.db.transaction() as tx:
                if tx.query("SELECT handle FROM companies WHERE handle = $1", [handle]):
                    raise ConflictError(f"Duplicate company: {handle}")
                rows = tx.query(
                    f"""INSERT INTO companies
                        (handle, name, description, num_employees, logo_url)
                        VALUES ($1, $2, $3, $4, $5)
                        RETURNING {COMPANY_COLUMNS}""",
                    [
                        handle,
                        data["name"],
                        data["description"],
                        data.get("numEmployees"),
                        data.get("logoUrl"),
                    ],
                )
        except ConstraintViolationError as exc:
            conflict = _unique_conflict(exc, handle, data["name"])
            if conflict is None:
                raise
            raise conflict from exc

        logger.info("Created company %s", handle)
        return rows[0]

    def find_all(self, criteria: CompanyFilter | None = None) -> list[dict[str, Any]]:
        rows = self.db.query(
            f"""SELECT {COMPANY_COLUMNS}
                FROM companies
                ORDER BY name"""
        )
        return filter_companies(rows, criteria)

    def get(self, handle: str) -> dict[str, Any]:
        """Return the company with its jobs as {id, title, salary, equity}."""
        with self.db.transaction() as tx:
            rows = tx.query(
                f"""SELECT {COMPANY_COLUMNS}
                    FROM companies
                    WHERE handle = $1""",
                [handle],
            )
            if not rows:
                raise NotFoundError(f"No company: {handle}")
            jobs = tx.query(
                """SELECT id, title, salary, equity
                   FROM jobs
                   WHERE company_handle = $1
                   ORDER BY id""",
                [handle],
            )

        company = rows[0]
        company["jobs"] = jobs
        return company

    def update(self, handle: str, data: dict[str, Any]) -> dict[str, Any]:
        """Partial update: only the fields present in data change.

        data can include {name, description, numEmployees, logoUrl}.
        """
        update = sql_for_partial_update(data, COLUMN_NAMES)
        handle_idx = len(update.values) + 1
        try:
            rows = self.db.query(
                f"""UPDATE companies
                    SET {update.set_clause}
                    WHERE handle = ${handle_idx}
                    RETURNING {COMPANY_COLUMNS}""",
                [*update.values, handle],
            )
        except ConstraintViolationError as exc:
            conflict = _unique_conflict(exc, handle, data.get("name"))
            if conflict is None:
                raise
            raise conflict from exc

        if not rows:
            raise NotFoundError(f"No company: {handle}")
        logger.info("Updated company %s (%s)", handle, ", ".join(data))
        return rows[0]

    def remove(self, handle: str) -> None:
        rows = self.db.query(
            """DELETE FROM companies
               WHERE handle = $1
               RETURNING handle""",
            [handle],
        )
        if not rows:
            raise NotFoundError(f"No company: {handle}")
        logger.info("Deleted company %s", handle)
