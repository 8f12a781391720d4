"""Fees service: balance calculation over an enrollment's fee assessment and its payments."""

import logging
from decimal import Decimal
from typing import Iterable

from app.core.enums import BalanceStatus, PaymentStatusCode
from app.core.exceptions import NotFoundError
from app.core.models import FeeAssessment, PaymentTransaction
from app.core.models.fee_assessment import ITEMIZED_FEE_FIELDS, MISCELLANEOUS_FEE_FIELDS
from app.db.repository import PaymentRepository

from .schemas import BalanceResult, FeesDetails, FeesInformationResponse, FeesSummary

logger = logging.getLogger(__name__)


def to_decimal(val) -> Decimal:
    if val is None:
        return Decimal("0")
    return val if isinstance(val, Decimal) else Decimal(str(val))


# --- Balance calculation (pure) ---
def total_completed(transactions: Iterable[PaymentTransaction]) -> Decimal:
    """Sum of amounts over COMPLETED transactions. PENDING and FAILED never count."""
    return sum(
        (to_decimal(t.amount) for t in transactions if t.status_code == PaymentStatusCode.COMPLETED.value),
        Decimal("0"),
    )


def derive_payment_status(total_paid: Decimal, remaining_balance: Decimal) -> BalanceStatus:
    # Full payment wins over partial, even when nothing was paid (zero assessment).
    if remaining_balance <= 0:
        return BalanceStatus.PAID_IN_FULL
    if total_paid > 0:
        return BalanceStatus.PARTIAL
    return BalanceStatus.UNPAID


def miscellaneous_fees_total(assessment: FeeAssessment) -> Decimal:
    return sum((to_decimal(getattr(assessment, f)) for f in MISCELLANEOUS_FEE_FIELDS), Decimal("0"))


def compute_balance(
    assessment: FeeAssessment,
    transactions: Iterable[PaymentTransaction],
) -> BalanceResult:
    total_assessed = to_decimal(assessment.total_assessed)
    total_paid = total_completed(transactions)
    remaining = total_assessed - total_paid
    return BalanceResult(
        total_assessed=total_assessed,
        total_paid=total_paid,
        remaining_balance=remaining,
        payment_status=derive_payment_status(total_paid, remaining),
    )


def _warn_on_itemized_mismatch(assessment: FeeAssessment) -> None:
    itemized = sum((to_decimal(getattr(assessment, f)) for f in ITEMIZED_FEE_FIELDS), Decimal("0"))
    if itemized != to_decimal(assessment.total_assessed):
        logger.warning(
            "Itemized fees %s differ from total_assessed %s for enrollment=%s",
            itemized,
            assessment.total_assessed,
            assessment.enrollment_id,
        )


# --- Reads ---
async def _get_assessment(repo: PaymentRepository, enrollment_id: int) -> FeeAssessment:
    assessment = await repo.get_fee_assessment(enrollment_id)
    if not assessment:
        raise NotFoundError("Enrollment not found")
    return assessment


async def get_balance(repo: PaymentRepository, enrollment_id: int) -> BalanceResult:
    """Re-read the assessment and its transactions and recompute the balance."""
    assessment = await _get_assessment(repo, enrollment_id)
    transactions = await repo.list_transactions(enrollment_id)
    return compute_balance(assessment, transactions)


async def get_fees_information(repo: PaymentRepository, enrollment_id: int) -> FeesInformationResponse:
    assessment = await _get_assessment(repo, enrollment_id)
    _warn_on_itemized_mismatch(assessment)
    transactions = await repo.list_transactions(enrollment_id)
    balance = compute_balance(assessment, transactions)
    return FeesInformationResponse(
        enrollment_id=assessment.enrollment_id,
        student_id=assessment.student_id,
        term=assessment.term,
        currency=assessment.currency,
        summary=FeesSummary(
            total_assessed_fees=balance.total_assessed,
            total_amount_paid=balance.total_paid,
            remaining_balance=balance.remaining_balance,
            payment_status=balance.payment_status,
        ),
        fees_details=FeesDetails(
            tuition_fee=to_decimal(assessment.tuition_fee),
            computer_lab_fee=to_decimal(assessment.computer_lab_fee),
            athletic_fee=to_decimal(assessment.athletic_fee),
            library_fee=to_decimal(assessment.library_fee),
            miscellaneous_fees=miscellaneous_fees_total(assessment),
        ),
    )
