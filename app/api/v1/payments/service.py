"""Payment transaction lifecycle: initiation (PENDING) and gateway confirmation."""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from app.api.v1.fees.service import get_balance
from app.core.config import settings
from app.core.enums import PaymentStatusCode, allowed_sources
from app.core.exceptions import (
    InvalidRequestError,
    InvalidTransitionError,
    NotFoundError,
    StorageError,
)
from app.core.identifiers import build_gateway_url, generate_gateway_token, generate_transaction_id
from app.core.models import PaymentTransaction
from app.db.repository import PaymentRepository, TransactionIdConflict

from .schemas import (
    ConfirmPaymentRequest,
    ConfirmPaymentResponse,
    InitiatePaymentRequest,
    InitiatePaymentResponse,
)

logger = logging.getLogger(__name__)

CONFIRMED_MESSAGE = "Payment successfully recorded."

# Bounds of the Numeric(12, 2) amount column
AMOUNT_QUANTUM = Decimal("0.01")
MAX_AMOUNT = Decimal("9999999999.99")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def validate_amount(amount: Optional[Decimal]) -> Decimal:
    """Reject amounts the amount column would round or overflow, so the stored value equals the request."""
    if amount is None or not amount.is_finite() or amount <= 0:
        raise InvalidRequestError("amount must be greater than zero")
    if amount > MAX_AMOUNT:
        raise InvalidRequestError(f"amount must not exceed {MAX_AMOUNT}")
    if amount != amount.quantize(AMOUNT_QUANTUM):
        raise InvalidRequestError("amount must have at most 2 decimal places")
    return amount


def parse_status_code(raw: Optional[str]) -> PaymentStatusCode:
    """Map a caller-supplied status string onto PaymentStatusCode; unknown values are rejected."""
    value = (raw or "").strip().upper()
    try:
        return PaymentStatusCode(value)
    except ValueError:
        raise InvalidRequestError(f"Unknown status_code: {raw!r}")


async def initiate_payment(
    repo: PaymentRepository,
    enrollment_id: int,
    payload: InitiatePaymentRequest,
) -> InitiatePaymentResponse:
    """
    Create a PENDING transaction for the enrollment and hand back a gateway checkout URL.

    The amount is not compared with the remaining balance: overpayments and repeated
    attempts are accepted as-is. A transaction_id clash is retried with a fresh id up to
    settings.transaction_id_max_attempts times.
    """
    amount = validate_amount(payload.amount)
    if not await repo.get_fee_assessment(enrollment_id):
        raise NotFoundError("Enrollment not found")

    txn = None
    for attempt in range(1, settings.transaction_id_max_attempts + 1):
        candidate = PaymentTransaction(
            transaction_id=generate_transaction_id(),
            enrollment_id=enrollment_id,
            amount=amount,
            currency=settings.payment_currency,
            payment_method=(payload.payment_method or "").strip() or None,
            description=(payload.description or "").strip() or None,
            status_code=PaymentStatusCode.PENDING.value,
            transaction_timestamp=_now(),
        )
        try:
            txn = await repo.insert_transaction(candidate)
            break
        except TransactionIdConflict:
            logger.warning(
                "transaction_id collision on attempt %s/%s for enrollment=%s",
                attempt,
                settings.transaction_id_max_attempts,
                enrollment_id,
            )
    if txn is None:
        raise StorageError("Could not allocate a unique transaction id")

    logger.info(
        "Initiated transaction=%s enrollment=%s amount=%s status=PENDING",
        txn.transaction_id,
        enrollment_id,
        amount,
    )
    return InitiatePaymentResponse(
        transaction_id=txn.transaction_id,
        enrollment_id=enrollment_id,
        status=PaymentStatusCode.PENDING,
        amount_due=amount,
        payment_gateway_url=build_gateway_url(settings.payment_gateway_url, generate_gateway_token()),
        timestamp=txn.transaction_timestamp,
    )


async def confirm_payment(
    repo: PaymentRepository,
    payload: ConfirmPaymentRequest,
    enrollment_id: Optional[int] = None,
) -> ConfirmPaymentResponse:
    """
    Apply the gateway's verdict to a PENDING transaction and return the recomputed balance.

    The status change is one conditional UPDATE matching both the id and an allowed
    current status, so of two racing confirmations exactly one takes effect and the
    other gets InvalidTransitionError. The transaction_timestamp becomes the
    confirmation time.

    When enrollment_id is given, a transaction owned by another enrollment is
    reported as not found and left untouched.
    """
    target = parse_status_code(payload.status_code)
    transaction_id = payload.transaction_id
    sources = allowed_sources(target)

    if enrollment_id is not None:
        owned = await repo.get_transaction(transaction_id)
        if owned is None:
            raise NotFoundError("Transaction not found")
        if owned.enrollment_id != enrollment_id:
            logger.warning(
                "Rejected confirm of transaction=%s owned by enrollment=%s via enrollment=%s",
                transaction_id,
                owned.enrollment_id,
                enrollment_id,
            )
            raise NotFoundError("Transaction not found")

    affected = 0
    if sources:
        affected = await repo.update_transaction_status(
            transaction_id,
            target,
            (payload.gateway_reference or "").strip() or None,
            _now(),
            sorted(sources, key=lambda s: s.value),
        )

    txn = await repo.get_transaction(transaction_id)
    if txn is None:
        raise NotFoundError("Transaction not found")
    if not affected:
        logger.warning(
            "Rejected transition transaction=%s current=%s requested=%s",
            transaction_id,
            txn.status_code,
            target.value,
        )
        raise InvalidTransitionError(
            f"Transaction {transaction_id} cannot move from {txn.status_code} to {target.value}"
        )

    balance = await get_balance(repo, txn.enrollment_id)
    logger.info(
        "Confirmed transaction=%s status=%s enrollment=%s remaining_balance=%s",
        transaction_id,
        target.value,
        txn.enrollment_id,
        balance.remaining_balance,
    )
    return ConfirmPaymentResponse(
        transaction_id=transaction_id,
        status=target,
        updated_balance=balance.remaining_balance,
        message=CONFIRMED_MESSAGE,
    )
