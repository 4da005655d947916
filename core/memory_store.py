# core/memory_store.py
from typing import Dict, List, Optional
from core.entities import ListResult, ObjectHead, StoredObject
from core.object_store import ObjectNotFoundError


class MemoryObjectStore:
    """
    Dict-backed bucket for tests and STORE_BACKEND=memory.

    Listing is lexicographic, like S3. With a delimiter, keys that contain
    it after the prefix collapse into one common prefix each.
    """

    def __init__(self, bucket: str = "memory") -> None:
        self.bucket = bucket
        self._objects: Dict[str, StoredObject] = {}

    async def list(
        self,
        prefix: str = "",
        delimiter: Optional[str] = None,
        max_keys: int = 1000,
    ) -> ListResult:
        names = sorted(k for k in self._objects if k.startswith(prefix))
        result = ListResult()
        seen = set()
        for key in names:
            if len(result.keys) + len(result.common_prefixes) >= max_keys:
                break
            rest = key[len(prefix) :]
            if delimiter and delimiter in rest:
                group = prefix + rest.split(delimiter, 1)[0] + delimiter
                if group not in seen:
                    seen.add(group)
                    result.common_prefixes.append(group)
                continue
            result.keys.append(key)
        return result

    async def get(self, key: str) -> bytes:
        obj = self._objects.get(key)
        if obj is None:
            raise ObjectNotFoundError("get", key)
        return obj.body

    async def put(self, key: str, body: bytes, content_type: str) -> None:
        self._objects[key] = StoredObject(body=bytes(body), content_type=content_type)

    async def head(self, key: str) -> ObjectHead:
        obj = self._objects.get(key)
        if obj is None:
            raise ObjectNotFoundError("head", key)
        return ObjectHead(content_type=obj.content_type, size=len(obj.body))

    async def delete(self, key: str) -> None:
        self._objects.pop(key, None)

    # ---------------- Test helpers ----------------

    def keys(self) -> List[str]:
        return sorted(self._objects)

    def content_type(self, key: str) -> str:
        return self._objects[key].content_type
