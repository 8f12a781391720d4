"""Payment transaction: one payment attempt against an enrollment's fee assessment."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.core.enums import PaymentStatusCode
from app.db.session import Base


class PaymentTransaction(Base):
    """
    Created PENDING on initiation; status_code, transaction_ref and transaction_timestamp
    change once on confirmation. Never deleted.
    """

    __tablename__ = "payment_transactions"

    # Uniqueness of the generated id is enforced here; initiation retries on collision.
    transaction_id = Column(String(40), primary_key=True)
    enrollment_id = Column(
        Integer,
        ForeignKey("fees_information.enrollment_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    payment_method = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    # Stored as string so new PaymentStatusCode members need no migration
    status_code = Column(String(20), nullable=False, default=PaymentStatusCode.PENDING.value)
    transaction_ref = Column(String(128), nullable=True)
    transaction_timestamp = Column(DateTime(timezone=True), nullable=False)

    fee_assessment = relationship("FeeAssessment", backref="transactions")
