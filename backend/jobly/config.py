from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="JOBLY_")

    db_path: Path = Path("jobly.sqlite")
    api_prefix: str = "/api/v1"
    token_ttl_seconds: int = 3600  # 1 hour
    log_level: str = "INFO"
    # argon2 work factors; raising them rehashes passwords on next login
    password_time_cost: int = 3
    password_memory_cost: int = 65536  # KiB
    # Seeds an admin account on startup when both are set.
    admin_username: str | None = None
    admin_password: str | None = None
    cors_origins: list[str] = [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ]


settings = Settings()
