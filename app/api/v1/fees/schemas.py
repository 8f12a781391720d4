"""Fees schemas."""

from pydantic import BaseModel

from app.core.enums import BalanceStatus
from app.core.schemas import Money


class BalanceResult(BaseModel):
    """Output of the balance calculation for one enrollment."""

    total_assessed: Money
    total_paid: Money
    remaining_balance: Money
    payment_status: BalanceStatus


class FeesSummary(BaseModel):
    total_assessed_fees: Money
    total_amount_paid: Money
    remaining_balance: Money
    payment_status: BalanceStatus


class FeesDetails(BaseModel):
    tuition_fee: Money
    computer_lab_fee: Money
    athletic_fee: Money
    library_fee: Money
    miscellaneous_fees: Money


class FeesInformationResponse(BaseModel):
    enrollment_id: int
    student_id: str
    term: str
    currency: str
    summary: FeesSummary
    fees_details: FeesDetails
