"""Payments router: initiate and confirm payment transactions for an enrollment."""

from typing import Union

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.exceptions import InvalidRequestError, ServiceError
from app.core.schemas import ErrorResponse
from app.db.repository import PaymentRepository, get_repository

from .schemas import (
    ConfirmPaymentRequest,
    ConfirmPaymentResponse,
    InitiatePaymentRequest,
    InitiatePaymentResponse,
    PaymentTransactionRequest,
)
from . import service

router = APIRouter(prefix="/api/v1/enrollment", tags=["payments"])


async def _dispatch(
    repo: PaymentRepository,
    enrollment_id: int,
    payload: PaymentTransactionRequest,
) -> Union[InitiatePaymentResponse, ConfirmPaymentResponse]:
    # Shape decides the operation: amount -> initiate, transaction_id + status_code -> confirm.
    if payload.amount is not None:
        return await service.initiate_payment(
            repo,
            enrollment_id,
            InitiatePaymentRequest(
                amount=payload.amount,
                payment_method=payload.payment_method,
                description=payload.description,
            ),
        )
    if payload.transaction_id and payload.status_code:
        return await service.confirm_payment(
            repo,
            ConfirmPaymentRequest(
                transaction_id=payload.transaction_id,
                status_code=payload.status_code,
                gateway_reference=payload.gateway_reference,
            ),
            enrollment_id,
        )
    raise InvalidRequestError()


@router.post(
    "/{enrollment_id}/payment_transactions",
    response_model=Union[InitiatePaymentResponse, ConfirmPaymentResponse],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def handle_payment_transaction(
    enrollment_id: int,
    payload: PaymentTransactionRequest,
    repo: PaymentRepository = Depends(get_repository),
) -> Union[InitiatePaymentResponse, ConfirmPaymentResponse]:
    try:
        return await _dispatch(repo, enrollment_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "/{enrollment_id}/payment_transactions/initiate",
    response_model=InitiatePaymentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def initiate_payment(
    enrollment_id: int,
    payload: InitiatePaymentRequest,
    repo: PaymentRepository = Depends(get_repository),
) -> InitiatePaymentResponse:
    try:
        return await service.initiate_payment(repo, enrollment_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "/{enrollment_id}/payment_transactions/confirm",
    response_model=ConfirmPaymentResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def confirm_payment(
    enrollment_id: int,
    payload: ConfirmPaymentRequest,
    repo: PaymentRepository = Depends(get_repository),
) -> ConfirmPaymentResponse:
    try:
        return await service.confirm_payment(repo, payload, enrollment_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
