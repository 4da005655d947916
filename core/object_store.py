# core/object_store.py
from typing import Optional, Protocol, runtime_checkable
from core.entities import ListResult, ObjectHead


class StoreError(Exception):
    """Backend failure talking to the object store (transient or permanent)."""

    def __init__(self, op: str, key: str, message: str = "") -> None:
        self.op = op
        self.key = key
        super().__init__(f"{op} {key!r} failed" + (f": {message}" if message else ""))


class ObjectNotFoundError(StoreError):
    def __init__(self, op: str, key: str) -> None:
        super().__init__(op, key, "not found")


@runtime_checkable
class ObjectStore(Protocol):
    """
    Capability surface of a single bucket. No atomicity or cross-key
    consistency is promised; every call is a remote round trip.
    """

    bucket: str

    async def list(
        self,
        prefix: str = "",
        delimiter: Optional[str] = None,
        max_keys: int = 1000,
    ) -> ListResult: ...

    async def get(self, key: str) -> bytes: ...

    async def put(self, key: str, body: bytes, content_type: str) -> None: ...

    async def head(self, key: str) -> ObjectHead: ...

    async def delete(self, key: str) -> None: ...
