"""Payment transaction lifecycle schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from app.core.enums import PaymentStatusCode
from app.core.schemas import Money


class InitiatePaymentRequest(BaseModel):
    # Positivity, precision and range are checked by the service so every entry point answers 400 alike.
    amount: Decimal
    payment_method: Optional[str] = Field(None, max_length=50, description="e.g. CARD, GCASH, BANK")
    description: Optional[str] = None


class ConfirmPaymentRequest(BaseModel):
    transaction_id: str = Field(..., min_length=1)
    status_code: str = Field(..., description="COMPLETED or FAILED")
    gateway_reference: Optional[str] = Field(None, max_length=128)


class PaymentTransactionRequest(BaseModel):
    """
    Combined body of the single payment_transactions endpoint.
    amount present -> initiate; transaction_id and status_code present -> confirm.
    """

    amount: Optional[Decimal] = None
    payment_method: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None
    transaction_id: Optional[str] = None
    status_code: Optional[str] = None
    gateway_reference: Optional[str] = Field(None, max_length=128)


class InitiatePaymentResponse(BaseModel):
    transaction_id: str
    enrollment_id: int
    status: PaymentStatusCode
    amount_due: Money
    payment_gateway_url: str
    timestamp: datetime


class ConfirmPaymentResponse(BaseModel):
    transaction_id: str
    status: PaymentStatusCode
    updated_balance: Money
    message: str
