"""In-memory filtering for company and job listings.

Every criterion is optional: ``None`` means the caller did not ask for it. A provided
zero is a real bound. Provided criteria combine with AND and the input order is kept.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable


@dataclass(frozen=True)
class CompanyFilter:
    min_employees: int | None = None
    max_employees: int | None = None
    name: str | None = None


@dataclass(frozen=True)
class JobFilter:
    title: str | None = None
    min_salary: int | None = None
    has_equity: bool | None = None


def _contains(value: str | None, needle: str) -> bool:
    return value is not None and needle.casefold() in value.casefold()


def _company_matches(company: dict[str, Any], criteria: CompanyFilter) -> bool:
    num_employees = company["numEmployees"]
    if criteria.min_employees is not None:
        if num_employees is None or num_employees < criteria.min_employees:
            return False
    if criteria.max_employees is not None:
        if num_employees is None or num_employees > criteria.max_employees:
            return False
    if criteria.name is not None and not _contains(company["name"], criteria.name):
        return False
    return True


def _job_matches(job: dict[str, Any], criteria: JobFilter) -> bool:
    if criteria.title is not None and not _contains(job["title"], criteria.title):
        return False
    if criteria.min_salary is not None:
        if job["salary"] is None or job["salary"] < criteria.min_salary:
            return False
    # has_equity=False means "don't filter", not "no equity"
    if criteria.has_equity:
        if job["equity"] is None or Decimal(job["equity"]) <= 0:
            return False
    return True


def filter_companies(companies: Iterable[dict[str, Any]], criteria: CompanyFilter | None = None) -> list[dict[str, Any]]:
    criteria = criteria or CompanyFilter()
    return [c for c in companies if _company_matches(c, criteria)]


def filter_jobs(jobs: Iterable[dict[str, Any]], criteria: JobFilter | None = None) -> list[dict[str, Any]]:
    criteria = criteria or JobFilter()
    return [j for j in jobs if _job_matches(j, criteria)]
