import pytest

from jobly.errors import BadRequestError, ConflictError, ConstraintViolationError, NotFoundError
from jobly.repositories.company import CompanyRepository
from jobly.services.filters import CompanyFilter

from conftest import COMPANIES


@pytest.fixture
def repo(db, job_ids):
    return CompanyRepository(db)


NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "description": "New Description",
    "numEmployees": 1,
    "logoUrl": "http://new.img",
}


class TestCreate:
    def test_create(self, repo):
        assert repo.create(NEW_COMPANY) == NEW_COMPANY

    def test_create_then_get(self, repo):
        repo.create(NEW_COMPANY)
        assert repo.get("new") == {**NEW_COMPANY, "jobs": []}

    def test_optional_fields_default_to_null(self, repo):
        company = repo.create({"handle": "bare", "name": "Bare", "description": ""})
        assert company["numEmployees"] is None
        assert company["logoUrl"] is None

    def test_duplicate_handle(self, repo, db):
        with pytest.raises(ConflictError):
            repo.create({**NEW_COMPANY, "handle": "c1"})
        rows = db.query("SELECT name FROM companies WHERE handle = $1", ["c1"])
        assert rows == [{"name": "C1"}]
        assert len(repo.find_all()) == 3

    def test_duplicate_name_from_constraint(self, repo):
        with pytest.raises(ConflictError) as exc_info:
            repo.create({**NEW_COMPANY, "name": "C1"})
        assert exc_info.value.message == "Duplicate company name: C1"
        assert len(repo.find_all()) == 3

    def test_duplicate_handle_from_constraint(self, repo, stale_handle_check):
        stale_handle_check([])
        with pytest.raises(ConflictError) as exc_info:
            repo.create({**NEW_COMPANY, "handle": "c1"})
        assert exc_info.value.message == "Duplicate company: c1"
        assert len(repo.find_all()) == 3

    def test_check_constraint_is_not_a_conflict(self, repo):
        with pytest.raises(ConstraintViolationError) as exc_info:
            repo.create({**NEW_COMPANY, "numEmployees": -1})
        assert not isinstance(exc_info.value, ConflictError)
        assert exc_info.value.kind == "CHECK"
        assert len(repo.find_all()) == 3


class TestFindAll:
    def test_no_filter(self, repo):
        assert repo.find_all() == COMPANIES

    def test_ordered_by_name(self, repo):
        repo.create({**NEW_COMPANY, "handle": "a0", "name": "A0"})
        assert [c["handle"] for c in repo.find_all()] == ["a0", "c1", "c2", "c3"]

    def test_employee_range(self, repo):
        result = repo.find_all(CompanyFilter(min_employees=2, max_employees=3))
        assert result == COMPANIES[1:]

    def test_name(self, repo):
        result = repo.find_all(CompanyFilter(min_employees=1, max_employees=3, name="c1"))
        assert [c["name"] for c in result] == ["C1"]


class TestGet:
    def test_get_with_jobs(self, repo, job_ids):
        company = repo.get("c1")
        assert company["handle"] == "c1"
        assert company["jobs"] == [
            {"id": job_ids[0], "title": "Founder", "salary": 150000, "equity": "0.5"},
            {"id": job_ids[1], "title": "Engineer", "salary": 90000, "equity": "0"},
        ]

    def test_get_without_jobs(self, repo):
        assert repo.get("c3") == {**COMPANIES[2], "jobs": []}

    def test_not_found(self, repo):
        with pytest.raises(NotFoundError):
            repo.get("nope")


class TestUpdate:
    def test_update(self, repo):
        data = {"name": "New", "description": "New Description", "numEmployees": 10, "logoUrl": "http://new.img"}
        assert repo.update("c1", data) == {"handle": "c1", **data}
        assert repo.get("c1")["numEmployees"] == 10

    def test_partial_update_keeps_other_fields(self, repo):
        company = repo.update("c1", {"description": "Changed"})
        assert company == {**COMPANIES[0], "description": "Changed"}

    def test_null_fields(self, repo):
        company = repo.update("c1", {"numEmployees": None, "logoUrl": None})
        assert company["numEmployees"] is None
        assert company["logoUrl"] is None

    def test_idempotent(self, repo):
        once = repo.update("c2", {"name": "Twice"})
        twice = repo.update("c2", {"name": "Twice"})
        assert once == twice
        company = repo.get("c2")
        del company["jobs"]
        assert company == once

    def test_not_found(self, repo):
        with pytest.raises(NotFoundError):
            repo.update("nope", {"name": "test"})

    def test_no_data(self, repo):
        with pytest.raises(BadRequestError):
            repo.update("c1", {})

    def test_name_conflict(self, repo):
        with pytest.raises(ConflictError) as exc_info:
            repo.update("c1", {"name": "C2"})
        assert exc_info.value.message == "Duplicate company name: C2"

    def test_not_null_is_not_a_conflict(self, repo):
        with pytest.raises(ConstraintViolationError) as exc_info:
            repo.update("c1", {"description": None})
        assert not isinstance(exc_info.value, ConflictError)
        assert exc_info.value.kind == "NOT NULL"
        assert repo.get("c1")["description"] == "Desc1"


class TestRemove:
    def test_remove(self, repo, db):
        assert repo.remove("c1") is None
        with pytest.raises(NotFoundError):
            repo.get("c1")
        assert db.query("SELECT id FROM jobs WHERE company_handle = $1", ["c1"]) == []

    def test_not_found(self, repo):
        with pytest.raises(NotFoundError):
            repo.remove("nope")
