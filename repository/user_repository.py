# repository/user_repository.py
import asyncio
import json
from typing import Any, Optional
from core.object_store import ObjectStore
from repository.namespaces import (
    CREDENTIAL_SUFFIX,
    JSON_CONTENT_TYPE,
    PAYLOAD_SUFFIX,
    TEXT_CONTENT_TYPE,
    object_key,
)
from util.functions import dump_json, to_text


class UserRepository:
    """
    Authoritative per-user records in the admin bucket:
      <user>/<user>.json  profile document
      <user>/<user>.pwd   encrypted credential, write-only from this API
    """

    def __init__(self, store: ObjectStore) -> None:
        self._store = store

    @staticmethod
    def record_key(username: str) -> str:
        return object_key(username, username + PAYLOAD_SUFFIX)

    @staticmethod
    def credential_key(username: str) -> str:
        return object_key(username, username + CREDENTIAL_SUFFIX)

    async def get(self, username: str) -> Any:
        """Raises ObjectNotFoundError, or json.JSONDecodeError for a corrupt record."""
        raw = await self._store.get(self.record_key(username))
        return json.loads(to_text(raw))

    async def put(self, username: str, data: Any) -> None:
        await self._store.put(self.record_key(username), dump_json(data), JSON_CONTENT_TYPE)

    async def put_credential(self, username: str, encrypted: str) -> None:
        await self._store.put(
            self.credential_key(username), encrypted.encode("utf-8"), TEXT_CONTENT_TYPE
        )

    async def delete(self, username: str) -> list[Optional[BaseException]]:
        """Delete both objects concurrently; returns the per-key failures (None = ok)."""
        outcomes = await asyncio.gather(
            self._store.delete(self.record_key(username)),
            self._store.delete(self.credential_key(username)),
            return_exceptions=True,
        )
        return [o if isinstance(o, BaseException) else None for o in outcomes]
