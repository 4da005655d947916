# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from model.store import StoreBackend, StoreConfig
from util.enums import Environment
import logging


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()

_log = logging.getLogger("config.settings")


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(..., validation_alias="APP_ENV")
    STATIC_DIR: str = Field(default="public", validation_alias="STATIC_DIR")

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(..., validation_alias="ALLOWED_ORIGIN")
    REDIS_URL: str = Field(default="redis://localhost:6379/0", validation_alias="REDIS_URL")
    RATE_LIMIT_ENABLED: bool = Field(default=True, validation_alias="RATE_LIMIT_ENABLED")
    RATE_LIMIT_TIMES: int = Field(default=120, validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(default=60, validation_alias="RATE_LIMIT_SECONDS")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")

    # Object store
    STORE_BACKEND: StoreBackend = Field(default=StoreBackend.S3, validation_alias="STORE_BACKEND")
    ADMIN_BUCKET: str = Field(..., validation_alias="ADMIN_BUCKET")
    PUBLIC_BUCKET: str = Field(..., validation_alias="PUBLIC_BUCKET")
    REGION: str = Field(..., validation_alias="REGION")
    COS_ENDPOINT_URL: str | None = Field(default=None, validation_alias="COS_ENDPOINT_URL")
    COS_SECRET_ID: str | None = Field(default=None, validation_alias="COS_SECRET_ID")
    COS_SECRET_KEY: str | None = Field(default=None, validation_alias="COS_SECRET_KEY")
    STORE_TIMEOUT_SECONDS: float = Field(default=10.0, validation_alias="STORE_TIMEOUT_SECONDS")
    ARCHIVE_CONCURRENCY: int = Field(default=8, validation_alias="ARCHIVE_CONCURRENCY")

    # Signature verification (unset -> trust the reviewing client)
    SIGNATURE_VERIFIER_URL: str | None = Field(
        default=None, validation_alias="SIGNATURE_VERIFIER_URL"
    )
    SIGNATURE_VERIFIER_TIMEOUT: float = Field(
        default=10.0, validation_alias="SIGNATURE_VERIFIER_TIMEOUT"
    )

    # Logging knobs
    LOGGER_NAME: str = "talon-review"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    def store_config(self) -> StoreConfig:
        """Snapshot of the object-store knobs handed to repositories at construction."""
        return StoreConfig(
            backend=self.STORE_BACKEND,
            admin_bucket=self.ADMIN_BUCKET,
            public_bucket=self.PUBLIC_BUCKET,
            region=self.REGION,
            endpoint_url=self.COS_ENDPOINT_URL,
            secret_id=self.COS_SECRET_ID,
            secret_key=self.COS_SECRET_KEY,
            timeout_seconds=self.STORE_TIMEOUT_SECONDS,
            archive_concurrency=self.ARCHIVE_CONCURRENCY,
        )


try:
    settings = Settings()
    if settings.STORE_BACKEND == StoreBackend.S3 and not (
        settings.COS_SECRET_ID and settings.COS_SECRET_KEY
    ):
        print(
            "❌ COS_SECRET_ID and COS_SECRET_KEY are required for the s3 store backend",
            file=sys.stderr,
        )
        sys.exit(1)
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
