"""
Persistence collaborator for fee assessments and payment transactions.

Services receive a PaymentRepository instead of touching the session directly. Every
database error other than a transaction-id collision is rolled back and re-raised as
StorageError.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from fastapi import Depends
from sqlalchemy import select, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import PaymentStatusCode
from app.core.exceptions import StorageError
from app.core.models import FeeAssessment, PaymentTransaction
from app.db.session import get_db

logger = logging.getLogger(__name__)


class TransactionIdConflict(Exception):
    """Insert rejected because the generated transaction_id already exists."""


class PaymentRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _fail(self, exc: SQLAlchemyError) -> StorageError:
        await self.db.rollback()
        logger.exception("Storage failure: %s", exc)
        return StorageError(f"Storage failure: {exc.__class__.__name__}")

    async def get_fee_assessment(self, enrollment_id: int) -> Optional[FeeAssessment]:
        try:
            return await self.db.get(FeeAssessment, enrollment_id)
        except SQLAlchemyError as e:
            raise await self._fail(e)

    async def get_transaction(self, transaction_id: str) -> Optional[PaymentTransaction]:
        try:
            result = await self.db.execute(
                select(PaymentTransaction).where(PaymentTransaction.transaction_id == transaction_id)
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise await self._fail(e)

    async def get_transaction_with_student(
        self, transaction_id: str
    ) -> Optional[Tuple[PaymentTransaction, str]]:
        try:
            result = await self.db.execute(
                select(PaymentTransaction, FeeAssessment.student_id)
                .join(FeeAssessment, PaymentTransaction.enrollment_id == FeeAssessment.enrollment_id)
                .where(PaymentTransaction.transaction_id == transaction_id)
                .execution_options(populate_existing=True)
            )
            row = result.first()
        except SQLAlchemyError as e:
            raise await self._fail(e)
        if row is None:
            return None
        return row[0], row[1]

    async def list_transactions(self, enrollment_id: int) -> List[PaymentTransaction]:
        try:
            result = await self.db.execute(
                select(PaymentTransaction)
                .where(PaymentTransaction.enrollment_id == enrollment_id)
                .order_by(PaymentTransaction.transaction_timestamp, PaymentTransaction.transaction_id)
                .execution_options(populate_existing=True)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise await self._fail(e)

    async def insert_transaction(self, txn: PaymentTransaction) -> PaymentTransaction:
        """Insert and commit. Raises TransactionIdConflict when the id is already taken."""
        try:
            self.db.add(txn)
            await self.db.commit()
            await self.db.refresh(txn)
        except IntegrityError as e:
            await self.db.rollback()
            if await self._transaction_exists(txn.transaction_id):
                raise TransactionIdConflict(txn.transaction_id) from e
            raise await self._fail(e)
        except SQLAlchemyError as e:
            raise await self._fail(e)
        return txn

    async def _transaction_exists(self, transaction_id: str) -> bool:
        try:
            result = await self.db.execute(
                select(PaymentTransaction.transaction_id).where(
                    PaymentTransaction.transaction_id == transaction_id
                )
            )
            return result.first() is not None
        except SQLAlchemyError as e:
            raise await self._fail(e)

    async def update_transaction_status(
        self,
        transaction_id: str,
        status_code: PaymentStatusCode,
        transaction_ref: Optional[str],
        timestamp: datetime,
        from_statuses: List[PaymentStatusCode],
    ) -> int:
        """
        Single conditional UPDATE keyed by transaction_id and the current status.
        Returns the affected row count; 0 means unknown id or a disallowed current status.
        """
        stmt = (
            update(PaymentTransaction)
            .where(
                PaymentTransaction.transaction_id == transaction_id,
                PaymentTransaction.status_code.in_([s.value for s in from_statuses]),
            )
            .values(
                status_code=status_code.value,
                transaction_ref=transaction_ref,
                transaction_timestamp=timestamp,
            )
        )
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            raise await self._fail(e)
        return result.rowcount

    async def ping(self) -> None:
        try:
            await self.db.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise await self._fail(e)


async def get_repository(db: AsyncSession = Depends(get_db)) -> PaymentRepository:
    return PaymentRepository(db)
