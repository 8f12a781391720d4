"""Transaction detail and history schemas."""

from typing import List, Optional

from pydantic import BaseModel

from app.core.schemas import Money


class TransactionDetailResponse(BaseModel):
    transaction_id: str
    date: str
    student_id: str
    amount_paid: Money
    payment_method: Optional[str] = None
    reference_number: Optional[str] = None
    status: str


class TransactionHistoryItem(BaseModel):
    """One row of the history view; date is YYYY-MM-DD only."""

    transaction_id: str
    date: str
    amount: Money
    status: str
    type: Optional[str] = None


class TransactionHistoryResponse(BaseModel):
    enrollment_id: int
    total_paid: Money
    transactions: List[TransactionHistoryItem]
