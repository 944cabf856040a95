# Standard library imports
from pathlib import Path
import secrets
from typing import Annotated, Any, Literal

# Third-party imports
from pydantic import AnyUrl, BeforeValidator, computed_field
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR: Path = Path(__file__).resolve().parent.parent


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class CommonSettings(BaseSettings):
    model_config = SettingsConfigDict(
        # Use top level .env file (one level above ./back/)
        env_file="../.env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # General settings
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["dev", "staging", "production"] = "dev"
    DEBUG_MODE: bool = False
    PROJECT_NAME: str = "Janakural"

    # Database settings
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "janakural"
    # Overrides the PostgreSQL URI when set (e.g. sqlite+aiosqlite:///./janakural.db)
    DATABASE_URL: str | None = None
    DATABASE_ECHO: bool = False

    @property
    def SQLALCHEMY_ASYNC_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return str(
            MultiHostUrl.build(
                scheme="postgresql+asyncpg",  # async driver for async queries
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_SERVER,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )

    # CORS settings
    BACKEND_CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_cors)] = [
        AnyUrl("http://localhost:3000/"),
        AnyUrl("https://janakural.app/"),
    ]

    @computed_field  # type: ignore[prop-decorator, misc]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # Optional settings
    SENTRY_DSN: str | None = None

    # JWT settings (tokens are issued by the external auth provider)
    JWT_ALGORITHM: str = "HS256"
    JWT_SECRET_KEY: str = secrets.token_urlsafe(32)

    # Default super admin provisioned on startup
    ADMIN_PHONE_NUMBER: str = "+17742769594"
    ADMIN_NAME: str = "Super Admin"
    DEFAULT_PHONE_REGION: str = "IN"

    # S3 settings
    S3_URL: str = "http://localhost:9000"
    S3_ACCESS_KEY_ID: str = ""
    S3_SECRET_ACCESS_KEY: str = ""
    S3_PUBLIC_BUCKET_NAME: str = "janakural-public"
    S3_SECURE: bool = False
    S3_ISSUES_PREFIX: str = "issues"

    # Issue photos
    ALLOWED_PHOTO_TYPES: list[str] = [
        "image/png",
        "image/jpeg",
        "image/jpg",
    ]
    MAX_PHOTO_SIZE: int = 10 * 1024 * 1024  # 10 MB
    MAX_PHOTOS_PER_ISSUE: int = 5

    # Firebase Cloud Messaging
    FIREBASE_CREDENTIALS_PATH: str | None = None  # falls back to application default credentials
    FIREBASE_PROJECT_ID: str | None = None
    PUSH_NEW_ISSUE_TITLE: str = "New Issue Reported"
    ADMIN_ISSUE_LINK_TEMPLATE: str = "/admin/issues?highlight={issue_id}"

    # Celery settings
    CELERY_BROKER_URL: str = "redis://redis:6379/2"
    CELERY_RESULT_BACKEND: str = "redis://redis:6379/3"
    CELERY_WORKER_CONCURRENCY: int = 4
    CELERY_TASK_TIME_LIMIT: int = 300  # 5 minutes
    CELERY_TASK_SOFT_TIME_LIMIT: int = 240  # 4 minutes

    # Showcase / listing
    SHOWCASE_DEFAULT_LIMIT: int = 10
    SHOWCASE_MAX_LIMIT: int = 50
