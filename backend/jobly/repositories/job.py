import logging
from decimal import Decimal
from typing import Any

from jobly.database import Database
from jobly.errors import ConstraintViolationError, InvalidReferenceError, NotFoundError
from jobly.services.filters import JobFilter, filter_jobs
from jobly.utils.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

# Field and column names coincide for every updatable job field.
COLUMN_NAMES: dict[str, str] = {}

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def normalize_equity(equity: Any) -> str | None:
    """Exact plain decimal text for storage.

    Floats go through str() to avoid binary noise; fixed-point formatting keeps small
    values like 1E-8 as "0.00000001".
    """
    if equity is None:
        return None
    return format(Decimal(str(equity)), "f")


class JobRepository:
    def __init__(self, db: Database):
        self.db = db

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a job and return it with its generated id.

        data should be {title, salary, equity, companyHandle}.
        Raises InvalidReferenceError if companyHandle is not an existing company.
        """
        company_handle = data["companyHandle"]
        try:
            with self.db.transaction() as tx:
                if not tx.query("SELECT handle FROM companies WHERE handle = $1", [company_handle]):
                    raise InvalidReferenceError(f"Company handle {company_handle} not found")
                rows = tx.query(
                    f"""INSERT INTO jobs
                        (title, salary, equity, company_handle)
                        VALUES ($1, $2, $3, $4)
                        RETURNING {JOB_COLUMNS}""",
                    [
                        data["title"],
                        data.get("salary"),
                        normalize_equity(data.get("equity")),
                        company_handle,
                    ],
                )
        except ConstraintViolationError as exc:
            # company removed between the check and the insert
            if not exc.is_foreign_key():
                raise
            raise InvalidReferenceError(f"Company handle {company_handle} not found") from exc

        job = rows[0]
        logger.info("Created job %s for %s", job["id"], company_handle)
        return job

    def find_all(self, criteria: JobFilter | None = None) -> list[dict[str, Any]]:
        rows = self.db.query(
            f"""SELECT {JOB_COLUMNS}
                FROM jobs
                ORDER BY id"""
        )
        return filter_jobs(rows, criteria)

    def get(self, job_id: int) -> dict[str, Any]:
        rows = self.db.query(
            f"""SELECT {JOB_COLUMNS}
                FROM jobs
                WHERE id = $1""",
            [job_id],
        )
        if not rows:
            raise NotFoundError(f"No job: {job_id}")
        return rows[0]

    def update(self, job_id: int, data: dict[str, Any]) -> dict[str, Any]:
        """Partial update of {title, salary, equity}; id and companyHandle never change."""
        if "equity" in data:
            data = {**data, "equity": normalize_equity(data["equity"])}
        update = sql_for_partial_update(data, COLUMN_NAMES)
        id_idx = len(update.values) + 1
        rows = self.db.query(
            f"""UPDATE jobs
                SET {update.set_clause}
                WHERE id = ${id_idx}
                RETURNING {JOB_COLUMNS}""",
            [*update.values, job_id],
        )
        if not rows:
            raise NotFoundError(f"No job: {job_id}")
        logger.info("Updated job %s (%s)", job_id, ", ".join(data))
        return rows[0]

    def remove(self, job_id: int) -> None:
        rows = self.db.query(
            """DELETE FROM jobs
               WHERE id = $1
               RETURNING id""",
            [job_id],
        )
        if not rows:
            raise NotFoundError(f"No job: {job_id}")
        logger.info("Deleted job %s", job_id)
