from typing import List, Union
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./voyagehub.db"
    CORS_ORIGINS: Union[str, List[str]] = ["http://localhost:5173", "http://127.0.0.1:5173", "http://0.0.0.0:5173"]
    LOG_LEVEL: str = "INFO"
    JWT_SECRET_KEY: str = "your-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Document uploads
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE_BYTES: int = 10 * 1024 * 1024
    ALLOWED_UPLOAD_MIME_TYPES: Union[str, List[str]] = [
        "application/pdf",
        "image/jpeg",
        "image/png",
        "image/gif",
    ]

    AUTO_CREATE_TABLES: bool = True

    # Reminder scheduler
    SCHEDULER_ENABLED: bool = True
    REMINDER_INTERVAL_MINUTES: int = 60
    DOCUMENT_EXPIRY_WARNING_DAYS: int = 30
    BUDGET_WARNING_PERCENT: int = 75

    # Per-client request limit, in limits notation
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT: str = "100 per 15 minutes"

    @field_validator("CORS_ORIGINS", "ALLOWED_UPLOAD_MIME_TYPES", mode="before")
    @classmethod
    def parse_comma_separated(cls, v):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }


settings = Settings()
