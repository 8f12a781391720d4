"""Insert retries and failures, and concurrent confirmation."""

import asyncio
from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.api.v1.payments import service
from app.api.v1.payments.schemas import ConfirmPaymentRequest, InitiatePaymentRequest
from app.core.exceptions import InvalidTransitionError, StorageError
from app.core.models import FeeAssessment, PaymentTransaction
from app.db.repository import PaymentRepository

SEEDED_ENROLLMENT_ID = 1001  # matches the fee_assessment fixture

INITIATE_URL = f"/api/v1/enrollment/{SEEDED_ENROLLMENT_ID}/payment_transactions/initiate"


@pytest.mark.asyncio
async def test_collision_is_retried_with_fresh_id(
    client: AsyncClient, fee_assessment: FeeAssessment, monkeypatch
) -> None:
    ids = iter(["TXN-DUPLICATE", "TXN-DUPLICATE", "TXN-FRESH"])
    monkeypatch.setattr(service, "generate_transaction_id", lambda: next(ids))

    first = await client.post(INITIATE_URL, json={"amount": 100})
    assert first.json()["transaction_id"] == "TXN-DUPLICATE"

    second = await client.post(INITIATE_URL, json={"amount": 200})
    assert second.status_code == 201
    assert second.json()["transaction_id"] == "TXN-FRESH"


@pytest.mark.asyncio
async def test_collision_retries_are_bounded(
    client: AsyncClient, fee_assessment: FeeAssessment, session_factory: async_sessionmaker, monkeypatch
) -> None:
    calls = []

    def always_same() -> str:
        calls.append(1)
        return "TXN-DUPLICATE"

    monkeypatch.setattr(service, "generate_transaction_id", always_same)
    monkeypatch.setattr(service.settings, "transaction_id_max_attempts", 3)

    assert (await client.post(INITIATE_URL, json={"amount": 100})).status_code == 201
    calls.clear()

    response = await client.post(INITIATE_URL, json={"amount": 200})
    assert response.status_code == 503
    assert len(calls) == 3

    # The original row is untouched
    async with session_factory() as session:
        rows = (await session.execute(select(PaymentTransaction))).scalars().all()
    assert len(rows) == 1
    assert rows[0].amount == Decimal("100")


@pytest.mark.asyncio
async def test_concurrent_confirmations_have_single_winner(
    session_factory: async_sessionmaker, fee_assessment: FeeAssessment
) -> None:
    async with session_factory() as session:
        created = await service.initiate_payment(
            PaymentRepository(session), SEEDED_ENROLLMENT_ID, InitiatePaymentRequest(amount=Decimal("20000"))
        )

    async def confirm(status_code: str):
        async with session_factory() as session:
            return await service.confirm_payment(
                PaymentRepository(session),
                ConfirmPaymentRequest(transaction_id=created.transaction_id, status_code=status_code),
            )

    results = await asyncio.gather(confirm("COMPLETED"), confirm("FAILED"), return_exceptions=True)

    successes = [r for r in results if not isinstance(r, Exception)]
    conflicts = [r for r in results if isinstance(r, InvalidTransitionError)]
    assert len(successes) == 1
    assert len(conflicts) == 1

    async with session_factory() as session:
        txn = await session.get(PaymentTransaction, created.transaction_id)
    assert txn.status_code == successes[0].status.value


@pytest.mark.asyncio
async def test_refresh_failure_after_insert_is_storage_error(
    session_factory: async_sessionmaker, fee_assessment: FeeAssessment, monkeypatch
) -> None:
    async def broken_refresh(instance, *args, **kwargs):
        raise OperationalError("SELECT payment_transactions", {}, Exception("connection lost"))

    async with session_factory() as session:
        monkeypatch.setattr(session, "refresh", broken_refresh)
        with pytest.raises(StorageError):
            await service.initiate_payment(
                PaymentRepository(session), SEEDED_ENROLLMENT_ID, InitiatePaymentRequest(amount=Decimal("100"))
            )
