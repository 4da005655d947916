# controller/transaction_controller.py
from typing import List
from fastapi import APIRouter, Depends
from controller.controller_dependencies import (
    get_transaction_service,
    rate_limit_dependencies,
)
from model.api import CommitResponse, RawSignatureResponse, RejectResponse
from service.transaction_service import TransactionService
from util.constants import InternalURIs

transaction_router = APIRouter(dependencies=rate_limit_dependencies())


@transaction_router.get(InternalURIs.TRANSACTIONS_LIST, response_model=List[str])
async def list_transactions(
    service: TransactionService = Depends(get_transaction_service),
) -> List[str]:
    return await service.list_pending()


@transaction_router.get(InternalURIs.TRANSACTION_RAW, response_model=RawSignatureResponse)
async def raw_signature(
    namespace: str,
    filename: str,
    service: TransactionService = Depends(get_transaction_service),
) -> RawSignatureResponse:
    return await service.get_raw_signature(namespace, filename)


@transaction_router.post(InternalURIs.TRANSACTION_COMMIT, response_model=CommitResponse)
async def commit_transaction(
    namespace: str,
    filename: str,
    service: TransactionService = Depends(get_transaction_service),
) -> CommitResponse:
    return await service.commit(namespace, filename)


@transaction_router.post(InternalURIs.TRANSACTION_REJECT, response_model=RejectResponse)
async def reject_transaction(
    namespace: str,
    filename: str,
    service: TransactionService = Depends(get_transaction_service),
) -> RejectResponse:
    return await service.reject(namespace, filename)
