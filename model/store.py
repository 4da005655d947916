# model/store.py
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class StoreBackend(str, Enum):
    S3 = "s3"
    MEMORY = "memory"


class StoreConfig(BaseModel):
    """
    Everything the object-store layer needs, built once from Settings and
    passed to the store factory instead of read from module globals.
    """

    model_config = ConfigDict(frozen=True)

    backend: StoreBackend = StoreBackend.S3
    admin_bucket: str
    public_bucket: str
    region: str
    endpoint_url: str | None = None
    secret_id: str | None = None
    secret_key: str | None = None
    timeout_seconds: float = 10.0
    archive_concurrency: int = Field(default=8, ge=1)
