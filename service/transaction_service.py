# service/transaction_service.py
import logging
from typing import List, Optional
from core.object_store import ObjectNotFoundError, ObjectStore, StoreError
from core.signature_verifier import SignatureVerifier, VerifierUnavailableError
from model.api import CommitResponse, RawSignatureResponse, RejectResponse
from model.transaction import TransactionRef
from repository.namespaces import (
    JSON_CONTENT_TYPE,
    LIST_PAGE_SIZE,
    RECYCLE_PREFIX,
    SIGNATURE_SUFFIX,
)
from repository.recycle_repository import RecycleRepository
from repository.user_index_repository import UserIndexRepository
from util.enums import ErrorMessage
from util.errors import NotFoundError, StoreFailureError, VerificationError
from util.functions import to_text
from util.timing import timed

logger = logging.getLogger(__name__)


class TransactionService:
    """
    Review workflow over the staging (public) bucket.

    A transaction is <ns>/<base>.json + <ns>/<base>.signature; the signature
    alone marks it as pending. Commit and reject are written as a sequence
    of steps that are each safe to repeat, because the store offers no
    multi-key transaction: a failed run leaves a state the next run finishes.
    """

    def __init__(
        self,
        staging: ObjectStore,
        admin: ObjectStore,
        archiver: RecycleRepository,
        user_index: UserIndexRepository,
        verifier: SignatureVerifier,
        page_size: int = LIST_PAGE_SIZE,
    ) -> None:
        self._staging = staging
        self._admin = admin
        self._archiver = archiver
        self._user_index = user_index
        self._verifier = verifier
        self._page_size = page_size

    async def list_pending(self) -> List[str]:
        """
        Signature keys outside recycle/. Store order, single page.
        A signature whose payload is missing is still listed.
        """
        try:
            listing = await self._staging.list(prefix="", max_keys=self._page_size)
        except StoreError as e:
            logger.error("tx.list.error err=%s", e)
            raise StoreFailureError.of(ErrorMessage.LIST_FAILED)
        return [
            key
            for key in listing.keys
            if key.endswith(SIGNATURE_SUFFIX) and not key.startswith(RECYCLE_PREFIX)
        ]

    async def get_raw_signature(self, namespace: str, filename: str) -> RawSignatureResponse:
        """
        Return the trimmed signature text for client-side verification.
        The payload half is deliberately not touched here.
        """
        ref = TransactionRef.parse(namespace, filename)
        try:
            raw = await self._staging.get(ref.signature_key)
        except ObjectNotFoundError:
            logger.warning("tx.raw.missing key=%s", ref.signature_key)
            raise NotFoundError.of(ErrorMessage.SIGNATURE_NOT_FOUND)
        except StoreError as e:
            logger.error("tx.raw.error key=%s err=%s", ref.signature_key, e)
            raise StoreFailureError.of(ErrorMessage.SIGNATURE_FETCH_FAILED)
        return RawSignatureResponse(signature=to_text(raw).strip(), sigKey=ref.signature_key)

    async def _fetch_signature(self, ref: TransactionRef) -> Optional[str]:
        try:
            return to_text(await self._staging.get(ref.signature_key)).strip()
        except ObjectNotFoundError:
            return None

    async def commit(self, namespace: str, filename: str) -> CommitResponse:
        ref = TransactionRef.parse(namespace, filename)
        log_kv = {"ns": ref.namespace, "base": ref.base}

        with timed(logger, "tx.commit", **log_kv):
            # 1. payload must exist; nothing has been written yet if it doesn't
            try:
                payload = await self._staging.get(ref.payload_key)
            except ObjectNotFoundError:
                logger.warning("tx.commit.payload.missing key=%s", ref.payload_key)
                raise NotFoundError.of(ErrorMessage.PAYLOAD_NOT_FOUND)
            except StoreError as e:
                logger.error("tx.commit.fetch.error key=%s err=%s", ref.payload_key, e)
                raise StoreFailureError.of(ErrorMessage.COMMIT_FAILED, str(e))

            # 2. verification gate before anything is promoted
            try:
                signature = await self._fetch_signature(ref)
                accepted = await self._verifier.verify(ref, payload, signature)
            except StoreError as e:
                logger.error("tx.commit.signature.error key=%s err=%s", ref.signature_key, e)
                raise StoreFailureError.of(ErrorMessage.COMMIT_FAILED, str(e))
            except VerifierUnavailableError as e:
                raise VerificationError.of(ErrorMessage.VERIFIER_UNAVAILABLE, str(e))
            if not accepted:
                logger.warning("tx.commit.rejected_signature key=%s", ref.signature_key)
                raise VerificationError.of(ErrorMessage.SIGNATURE_REJECTED)

            # 3. promote, last writer wins
            try:
                await self._admin.put(ref.payload_key, payload, JSON_CONTENT_TYPE)
            except StoreError as e:
                logger.error("tx.commit.promote.error key=%s err=%s", ref.payload_key, e)
                raise StoreFailureError.of(ErrorMessage.COMMIT_FAILED, str(e))

            # 4. retire the staged pair; already-gone keys are skipped
            try:
                archived = await self._archiver.archive(ref.keys)
            except StoreError as e:
                logger.error("tx.commit.archive.error key=%s err=%s", ref.signature_key, e)
                raise StoreFailureError.of(ErrorMessage.COMMIT_FAILED, str(e))

            # 5. index is a cache; the commit stands either way
            index_rebuilt = True
            try:
                await self._user_index.rebuild()
            except StoreError as e:
                index_rebuilt = False
                logger.warning("tx.commit.index.stale err=%s", e)

        logger.info(
            "tx.commit.ok ns=%s base=%s ts=%s", ref.namespace, ref.base, archived.timestamp
        )
        return CommitResponse(archivedAt=archived.timestamp, indexRebuilt=index_rebuilt)

    async def reject(self, namespace: str, filename: str) -> RejectResponse:
        """Archive whatever of the pair exists. The admin bucket is never touched."""
        ref = TransactionRef.parse(namespace, filename)
        try:
            with timed(logger, "tx.reject", ns=ref.namespace, base=ref.base):
                archived = await self._archiver.archive(ref.keys)
        except StoreError as e:
            logger.error("tx.reject.error key=%s err=%s", ref.signature_key, e)
            raise StoreFailureError.of(ErrorMessage.REJECT_FAILED, str(e))

        logger.info("tx.reject.ok key=%s ts=%s", ref.signature_key, archived.timestamp)
        return RejectResponse(archivedAt=archived.timestamp)
