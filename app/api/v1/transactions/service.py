"""Read-only transaction queries: single detail and per-enrollment history."""

from datetime import datetime

from app.api.v1.fees.service import to_decimal, total_completed
from app.core.exceptions import NotFoundError
from app.db.repository import PaymentRepository

from .schemas import TransactionDetailResponse, TransactionHistoryItem, TransactionHistoryResponse


def format_history_date(ts: datetime) -> str:
    """Display rule for the history view: keep the date, drop the time of day."""
    return ts.date().isoformat()


async def get_transaction_details(repo: PaymentRepository, transaction_id: str) -> TransactionDetailResponse:
    row = await repo.get_transaction_with_student(transaction_id)
    if row is None:
        raise NotFoundError("Transaction not found")
    txn, student_id = row
    return TransactionDetailResponse(
        transaction_id=txn.transaction_id,
        date=txn.transaction_timestamp.isoformat(),
        student_id=student_id,
        amount_paid=to_decimal(txn.amount),
        payment_method=txn.payment_method,
        reference_number=txn.transaction_ref,
        status=txn.status_code,
    )


async def get_transaction_history(repo: PaymentRepository, enrollment_id: int) -> TransactionHistoryResponse:
    """
    All transactions of an enrollment, oldest first. total_paid counts COMPLETED only.
    An enrollment without transactions gives an empty list rather than 404.
    """
    transactions = await repo.list_transactions(enrollment_id)
    return TransactionHistoryResponse(
        enrollment_id=enrollment_id,
        total_paid=total_completed(transactions),
        transactions=[
            TransactionHistoryItem(
                transaction_id=t.transaction_id,
                date=format_history_date(t.transaction_timestamp),
                amount=to_decimal(t.amount),
                status=t.status_code,
                type=t.description,
            )
            for t in transactions
        ],
    )
