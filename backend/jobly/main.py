import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobly.config import settings
from jobly.database import Database, init_db, integrity_check
from jobly.errors import JoblyError
from jobly.repositories.user import UserRepository
from jobly.routers import auth, companies, jobs
from jobly.services.auth_service import auth_service

VERSION = "0.1.0"

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger("jobly")


def seed_admin(db: Database):
    if not (settings.admin_username and settings.admin_password):
        return
    users = UserRepository(db)
    if not users.exists(settings.admin_username):
        users.create(settings.admin_username, settings.admin_password, is_admin=True)
        logger.info("Seeded admin user %s.", settings.admin_username)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create schema and integrity-check the database
    init_db(settings.db_path)
    result = integrity_check(settings.db_path)
    if result == "ok":
        logger.info("Database integrity check passed.")
    else:
        logger.error("DATABASE INTEGRITY CHECK FAILED: %s", result)

    app.state.db = Database.from_path(settings.db_path)
    seed_admin(app.state.db)
    yield
    # Shutdown: drop sessions and close the pool
    auth_service.revoke_all()
    app.state.db.dispose()


app = FastAPI(
    title="Jobly",
    description="Companies and the jobs they post",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(JoblyError)
async def jobly_error_handler(request: Request, exc: JoblyError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(companies.router, prefix=settings.api_prefix)
app.include_router(jobs.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": VERSION}
