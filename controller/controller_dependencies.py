# controller/controller_dependencies.py
import asyncio
from functools import lru_cache
from typing import List
from fastapi import Depends
from fastapi.params import Depends as DependsParam
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from core.memory_store import MemoryObjectStore
from core.object_store import ObjectStore
from core.s3_store import S3ObjectStore, make_s3_client
from core.signature_verifier import (
    ClientAttestedVerifier,
    HttpSignatureVerifier,
    SignatureVerifier,
)
from model.store import StoreBackend, StoreConfig
from repository.recycle_repository import RecycleRepository
from repository.user_index_repository import UserIndexRepository
from repository.user_repository import UserRepository
from service.transaction_service import TransactionService
from service.user_service import UserService


class StoreRegistry:
    """
    The two buckets the service talks to, built once per StoreConfig.
    archive_limiter caps copy/delete fan-out across every request, since
    both buckets share one boto3 connection pool.
    """

    def __init__(self, config: StoreConfig) -> None:
        self.config = config
        self.archive_limiter = asyncio.Semaphore(config.archive_concurrency)
        if config.backend == StoreBackend.MEMORY:
            self.staging: ObjectStore = MemoryObjectStore(config.public_bucket)
            self.admin: ObjectStore = MemoryObjectStore(config.admin_bucket)
        else:
            client = make_s3_client(config)
            self.staging = S3ObjectStore(client, config.public_bucket)
            self.admin = S3ObjectStore(client, config.admin_bucket)


@lru_cache(maxsize=1)
def get_stores() -> StoreRegistry:
    return StoreRegistry(settings.store_config())


@lru_cache(maxsize=1)
def get_signature_verifier() -> SignatureVerifier:
    if settings.SIGNATURE_VERIFIER_URL:
        return HttpSignatureVerifier(
            settings.SIGNATURE_VERIFIER_URL, settings.SIGNATURE_VERIFIER_TIMEOUT
        )
    return ClientAttestedVerifier()


def get_transaction_service(
    stores: StoreRegistry = Depends(get_stores),
    verifier: SignatureVerifier = Depends(get_signature_verifier),
) -> TransactionService:
    _archiver = RecycleRepository(stores.staging, limiter=stores.archive_limiter)
    _index = UserIndexRepository(stores.admin)
    return TransactionService(stores.staging, stores.admin, _archiver, _index, verifier)


def get_user_service(stores: StoreRegistry = Depends(get_stores)) -> UserService:
    return UserService(UserRepository(stores.admin), UserIndexRepository(stores.admin))


def rate_limit_dependencies() -> List[DependsParam]:
    if not settings.RATE_LIMIT_ENABLED:
        return []
    return [
        Depends(
            RateLimiter(times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS)
        )
    ]
