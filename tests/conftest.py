import asyncio
import inspect
import os
import sys
from pathlib import Path

# Settings are read at import time; pin a memory-backed config first.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("ALLOWED_ORIGIN", "http://testserver")
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("ADMIN_BUCKET", "admin-test")
os.environ.setdefault("PUBLIC_BUCKET", "public-test")
os.environ.setdefault("REGION", "test-region")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("STATIC_DIR", "")

import pytest  # noqa: E402

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.memory_store import MemoryObjectStore  # noqa: E402
from core.signature_verifier import ClientAttestedVerifier  # noqa: E402
from repository.recycle_repository import RecycleRepository  # noqa: E402
from repository.user_index_repository import UserIndexRepository  # noqa: E402
from service.transaction_service import TransactionService  # noqa: E402

FIXED_TS = "1700000000000"


def pytest_pyfunc_call(pyfuncitem):
    if inspect.iscoroutinefunction(pyfuncitem.obj):
        call_kwargs = {
            name: pyfuncitem.funcargs[name]
            for name in pyfuncitem._fixtureinfo.argnames
            if name in pyfuncitem.funcargs
        }
        asyncio.run(pyfuncitem.obj(**call_kwargs))
        return True
    return None


def pytest_configure(config):
    config.addinivalue_line("markers", "asyncio: mark test as async")


@pytest.fixture
def seed():
    """Synchronous put for sync tests; MemoryObjectStore.put never suspends."""

    def _seed(store, key: str, body: str, content_type: str = "application/json; charset=utf-8"):
        asyncio.run(store.put(key, body.encode("utf-8"), content_type))

    return _seed


@pytest.fixture
def staging() -> MemoryObjectStore:
    return MemoryObjectStore("public-test")


@pytest.fixture
def admin() -> MemoryObjectStore:
    return MemoryObjectStore("admin-test")


@pytest.fixture
def archiver(staging) -> RecycleRepository:
    return RecycleRepository(staging, concurrency=4, clock=lambda: FIXED_TS)


@pytest.fixture
def tx_service(staging, admin, archiver) -> TransactionService:
    return TransactionService(
        staging,
        admin,
        archiver,
        UserIndexRepository(admin),
        ClientAttestedVerifier(),
    )
