# core/signature_verifier.py
import logging
from typing import Optional, Protocol
import httpx
from model.transaction import TransactionRef
from util.functions import to_text
from util.timing import timed

logger = logging.getLogger(__name__)


class VerifierUnavailableError(Exception):
    pass


class SignatureVerifier(Protocol):
    async def verify(
        self, ref: TransactionRef, payload: bytes, signature: Optional[str]
    ) -> bool: ...


class ClientAttestedVerifier:
    """
    Accepts every transaction. The reviewing UI checks the signature with
    the raw endpoint before it calls commit; this keeps that contract.
    """

    async def verify(
        self, ref: TransactionRef, payload: bytes, signature: Optional[str]
    ) -> bool:
        logger.debug("verify.client_attested key=%s", ref.signature_key)
        return True


class HttpSignatureVerifier:
    """
    Delegates to an external verification service that owns the key material.

    Request:  POST <url> {"namespace","base","payload","signature"}
    Response: 2xx {"valid": true|false}
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = url
        self._timeout = httpx.Timeout(timeout, connect=min(timeout, 5.0))
        self._transport = transport

    async def verify(
        self, ref: TransactionRef, payload: bytes, signature: Optional[str]
    ) -> bool:
        if signature is None:
            logger.warning("verify.signature.missing key=%s", ref.signature_key)
            return False

        body = {
            "namespace": ref.namespace,
            "base": ref.base,
            "payload": to_text(payload),
            "signature": signature,
        }
        try:
            with timed(logger, "verify.remote", ns=ref.namespace):
                async with httpx.AsyncClient(
                    timeout=self._timeout, transport=self._transport
                ) as client:
                    res = await client.post(self._url, json=body)
        except httpx.RequestError as e:
            logger.error("verify.request_error err=%s", type(e).__name__)
            raise VerifierUnavailableError(type(e).__name__) from e

        if res.status_code // 100 != 2:
            logger.error("verify.bad_status status=%d", res.status_code)
            raise VerifierUnavailableError(f"status {res.status_code}")

        try:
            valid = bool(res.json().get("valid", False))
        except (ValueError, AttributeError) as e:
            raise VerifierUnavailableError("malformed verifier response") from e

        logger.info("verify.result key=%s valid=%s", ref.signature_key, valid)
        return valid
