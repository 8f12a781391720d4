"""Fees router: fee information and balance summary per enrollment."""

from fastapi import APIRouter, Depends, HTTPException

from app.core.exceptions import ServiceError
from app.core.schemas import ErrorResponse
from app.db.repository import PaymentRepository, get_repository

from .schemas import FeesInformationResponse
from . import service

router = APIRouter(prefix="/api/v1/enrollment", tags=["fees"])


@router.get(
    "/{enrollment_id}/fees_information",
    response_model=FeesInformationResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_fees_information(
    enrollment_id: int,
    repo: PaymentRepository = Depends(get_repository),
) -> FeesInformationResponse:
    try:
        return await service.get_fees_information(repo, enrollment_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
