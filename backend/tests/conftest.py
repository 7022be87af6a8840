import pytest
from fastapi.testclient import TestClient

from jobly.database import Database, Transaction, get_db, init_db
from jobly.main import app
from jobly.repositories.user import UserRepository
from jobly.services.auth_service import auth_service

COMPANIES = [
    {"handle": "c1", "name": "C1", "description": "Desc1", "numEmployees": 1, "logoUrl": "http://c1.img"},
    {"handle": "c2", "name": "C2", "description": "Desc2", "numEmployees": 2, "logoUrl": "http://c2.img"},
    {"handle": "c3", "name": "C3", "description": "Desc3", "numEmployees": 3, "logoUrl": "http://c3.img"},
]

JOBS = [
    {"title": "Founder", "salary": 150000, "equity": "0.5", "companyHandle": "c1"},
    {"title": "Engineer", "salary": 90000, "equity": "0", "companyHandle": "c1"},
    {"title": "Intern", "salary": None, "equity": None, "companyHandle": "c2"},
]


@pytest.fixture
def db(tmp_path):
    db_path = tmp_path / "jobly.sqlite"
    init_db(db_path)
    database = Database.from_path(db_path)
    yield database
    database.dispose()


@pytest.fixture
def job_ids(db):
    """Seed COMPANIES and JOBS; returns the generated job ids in JOBS order."""
    for c in COMPANIES:
        db.query(
            """INSERT INTO companies (handle, name, description, num_employees, logo_url)
               VALUES ($1, $2, $3, $4, $5)""",
            [c["handle"], c["name"], c["description"], c["numEmployees"], c["logoUrl"]],
        )
    ids = []
    for j in JOBS:
        rows = db.query(
            """INSERT INTO jobs (title, salary, equity, company_handle)
               VALUES ($1, $2, $3, $4)
               RETURNING id""",
            [j["title"], j["salary"], j["equity"], j["companyHandle"]],
        )
        ids.append(rows[0]["id"])
    return ids


@pytest.fixture
def fresh_auth_service():
    """Reset token state for each test."""
    auth_service.revoke_all()
    yield auth_service
    auth_service.revoke_all()


@pytest.fixture
def client(db, fresh_auth_service):
    app.dependency_overrides[get_db] = lambda: db
    c = TestClient(app)
    yield c
    app.dependency_overrides.clear()


def _token_for(db, username, is_admin):
    user = UserRepository(db).create(username, "password-123", is_admin=is_admin)
    return auth_service.issue_token(user)["token"]


@pytest.fixture
def admin_headers(db, fresh_auth_service):
    return {"Authorization": f"Bearer {_token_for(db, 'admin', True)}"}


@pytest.fixture
def user_headers(db, fresh_auth_service):
    return {"Authorization": f"Bearer {_token_for(db, 'u1', False)}"}


@pytest.fixture
def stale_handle_check(monkeypatch):
    """Make the company-handle pre-check return ``rows``, as if another writer changed
    the table between the check and the write."""
    def install(rows):
        original = Transaction.query

        def query(self, sql, values=()):
            if sql == "SELECT handle FROM companies WHERE handle = $1":
                return rows
            return original(self, sql, values)

        monkeypatch.setattr(Transaction, "query", query)
    return install
