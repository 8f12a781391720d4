"""Transactions router: transaction detail and enrollment transaction history."""

from fastapi import APIRouter, Depends, HTTPException

from app.core.exceptions import ServiceError
from app.core.schemas import ErrorResponse
from app.db.repository import PaymentRepository, get_repository

from .schemas import TransactionDetailResponse, TransactionHistoryResponse
from . import service

router = APIRouter(prefix="/api/v1", tags=["transactions"])


@router.get(
    "/transactions/{transaction_id}",
    response_model=TransactionDetailResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_transaction_details(
    transaction_id: str,
    repo: PaymentRepository = Depends(get_repository),
) -> TransactionDetailResponse:
    try:
        return await service.get_transaction_details(repo, transaction_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get(
    "/enrollment/{enrollment_id}/transaction_history",
    response_model=TransactionHistoryResponse,
)
async def get_transaction_history(
    enrollment_id: int,
    repo: PaymentRepository = Depends(get_repository),
) -> TransactionHistoryResponse:
    try:
        return await service.get_transaction_history(repo, enrollment_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
