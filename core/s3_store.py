# core/s3_store.py
import asyncio
import logging
from typing import Any, Callable, Optional, TypeVar
import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from core.entities import ListResult, ObjectHead
from core.object_store import ObjectNotFoundError, StoreError
from model.store import StoreConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


def make_s3_client(config: StoreConfig) -> Any:
    """
    One boto3 client per process; it is thread-safe and owns the HTTP pool,
    so its pool size is the ceiling for archiver fan-out.
    """
    session = boto3.Session(
        aws_access_key_id=config.secret_id,
        aws_secret_access_key=config.secret_key,
        region_name=config.region,
    )
    return session.client(
        "s3",
        region_name=config.region,
        endpoint_url=config.endpoint_url,
        config=BotoConfig(
            connect_timeout=config.timeout_seconds,
            read_timeout=config.timeout_seconds,
            retries={"max_attempts": 5, "mode": "standard"},
            max_pool_connections=max(10, config.archive_concurrency * 2),
        ),
    )


def _is_not_found(err: Exception) -> bool:
    if isinstance(err, ClientError):
        code = err.response.get("Error", {}).get("Code", "")
        return code in _NOT_FOUND_CODES
    return False


class S3ObjectStore:
    """
    ObjectStore over an S3-compatible bucket (Tencent COS in production).
    boto3 is blocking, so every call is pushed to a worker thread.
    """

    def __init__(self, client: Any, bucket: str) -> None:
        self._s3 = client
        self.bucket = bucket

    async def _call(self, op: str, key: str, fn: Callable[[], T]) -> T:
        try:
            return await asyncio.to_thread(fn)
        except (ClientError, BotoCoreError) as e:
            if _is_not_found(e):
                raise ObjectNotFoundError(op, key) from e
            logger.error("store.%s.error bucket=%s key=%s err=%s", op, self.bucket, key, e)
            raise StoreError(op, key, str(e)) from e

    async def list(
        self,
        prefix: str = "",
        delimiter: Optional[str] = None,
        max_keys: int = 1000,
    ) -> ListResult:
        kwargs: dict[str, Any] = {
            "Bucket": self.bucket,
            "Prefix": prefix,
            "MaxKeys": max_keys,
        }
        if delimiter:
            kwargs["Delimiter"] = delimiter

        resp = await self._call(
            "list", prefix, lambda: self._s3.list_objects_v2(**kwargs)
        )
        return ListResult(
            keys=[item["Key"] for item in resp.get("Contents") or []],
            common_prefixes=[p["Prefix"] for p in resp.get("CommonPrefixes") or []],
        )

    async def get(self, key: str) -> bytes:
        def _read() -> bytes:
            resp = self._s3.get_object(Bucket=self.bucket, Key=key)
            return resp["Body"].read()

        return await self._call("get", key, _read)

    async def put(self, key: str, body: bytes, content_type: str) -> None:
        await self._call(
            "put",
            key,
            lambda: self._s3.put_object(
                Bucket=self.bucket, Key=key, Body=body, ContentType=content_type
            ),
        )

    async def head(self, key: str) -> ObjectHead:
        resp = await self._call(
            "head", key, lambda: self._s3.head_object(Bucket=self.bucket, Key=key)
        )
        return ObjectHead(
            content_type=resp.get("ContentType"),
            size=int(resp.get("ContentLength") or 0),
        )

    async def delete(self, key: str) -> None:
        try:
            await self._call(
                "delete",
                key,
                lambda: self._s3.delete_object(Bucket=self.bucket, Key=key),
            )
        except ObjectNotFoundError:
            return
