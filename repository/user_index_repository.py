# repository/user_index_repository.py
import json
import logging
from typing import List
from core.object_store import ObjectStore
from repository.namespaces import (
    JSON_CONTENT_TYPE,
    KEY_SEPARATOR,
    RECYCLE,
    USER_INDEX_KEY,
)
from util.functions import dump_json, to_text

logger = logging.getLogger(__name__)


class UserIndexCorruptError(ValueError):
    pass


class UserIndexRepository:
    """
    user.json is a cache of the admin bucket's top-level "directories".
    It is always rebuilt in full and overwritten; nothing reads it to decide
    anything else, so a stale or missing index only degrades listing.
    """

    def __init__(self, store: ObjectStore, key: str = USER_INDEX_KEY) -> None:
        self._store = store
        self._key = key

    async def rebuild(self) -> List[str]:
        listing = await self._store.list(prefix="", delimiter=KEY_SEPARATOR)
        names = {p.rstrip(KEY_SEPARATOR) for p in listing.common_prefixes}
        users = sorted(n for n in names if n.strip() and n != RECYCLE)
        await self._store.put(self._key, dump_json(users), JSON_CONTENT_TYPE)
        logger.info("user.index.rebuilt count=%d", len(users))
        return users

    async def load(self) -> List[str]:
        """Raises ObjectNotFoundError when absent, UserIndexCorruptError when unreadable."""
        raw = await self._store.get(self._key)
        try:
            users = json.loads(to_text(raw))
        except json.JSONDecodeError as e:
            raise UserIndexCorruptError(str(e)) from e
        if not isinstance(users, list) or not all(isinstance(u, str) for u in users):
            raise UserIndexCorruptError("expected a JSON array of names")
        return users
