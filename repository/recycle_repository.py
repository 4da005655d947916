# repository/recycle_repository.py
import asyncio
import logging
from typing import Callable, List, Optional, Sequence
from core.entities import ArchiveResult
from core.object_store import ObjectNotFoundError, ObjectStore
from repository.namespaces import DEFAULT_CONTENT_TYPE, recycle_key
from util.functions import epoch_millis
from util.timing import timed

logger = logging.getLogger(__name__)


class RecycleRepository:
    """
    Flow:
    - Retire a batch of keys into recycle/<ts>/<key> (copy, then delete).
    - One timestamp per batch, so one logical operation lands in one folder.
    - Keys already gone are skipped, which makes a retried batch safe.
    - Keys run concurrently under a semaphore; a failure does not undo the
      keys that already moved. Pass a shared limiter so concurrent batches
      from different requests draw on one budget.
    """

    def __init__(
        self,
        store: ObjectStore,
        concurrency: int = 8,
        clock: Callable[[], str] = epoch_millis,
        limiter: Optional[asyncio.Semaphore] = None,
    ) -> None:
        self._store = store
        self._limiter = (
            limiter if limiter is not None else asyncio.Semaphore(max(1, int(concurrency)))
        )
        self._clock = clock

    async def _retire(self, key: str, timestamp: str) -> bool:
        async with self._limiter:
            try:
                head = await self._store.head(key)
                body = await self._store.get(key)
            except ObjectNotFoundError:
                logger.debug("recycle.skip key=%s", key)
                return False
            await self._store.put(
                recycle_key(timestamp, key),
                body,
                head.content_type or DEFAULT_CONTENT_TYPE,
            )
            await self._store.delete(key)
            return True

    async def archive(self, keys: Sequence[str]) -> ArchiveResult:
        timestamp = self._clock()
        result = ArchiveResult(timestamp=timestamp)
        if not keys:
            return result

        with timed(logger, "recycle.batch", ts=timestamp, keys=len(keys)):
            outcomes = await asyncio.gather(
                *(self._retire(k, timestamp) for k in keys),
                return_exceptions=True,
            )

        first_error: Optional[BaseException] = None
        failed: List[str] = []
        for key, outcome in zip(keys, outcomes):
            if isinstance(outcome, BaseException):
                failed.append(key)
                first_error = first_error or outcome
            elif outcome:
                result.archived.append(key)
            else:
                result.skipped.append(key)

        if first_error is not None:
            logger.error(
                "recycle.partial ts=%s archived=%d failed=%s",
                timestamp,
                len(result.archived),
                ",".join(failed),
            )
            raise first_error

        logger.info(
            "recycle.ok ts=%s archived=%d skipped=%d",
            timestamp,
            len(result.archived),
            len(result.skipped),
        )
        return result
