"""Fee assessment: one row per enrollment per term. Written by the enrollment process, read-only here."""

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, Numeric, String

from app.db.session import Base

MISCELLANEOUS_FEE_FIELDS = (
    "cultural_fee",
    "internet_fee",
    "medical_dental_fee",
    "registration_fee",
    "school_pub_fee",
    "id_validation_fee",
)

ITEMIZED_FEE_FIELDS = ("tuition_fee", "computer_lab_fee", "athletic_fee", "library_fee") + MISCELLANEOUS_FEE_FIELDS


class FeeAssessment(Base):
    """
    Fees owed for an enrollment.
    total_assessed is stored independently of the itemized columns and is authoritative.
    """

    __tablename__ = "fees_information"

    enrollment_id = Column(Integer, primary_key=True, autoincrement=False)
    student_id = Column(String(64), nullable=False, index=True)
    term = Column(String(50), nullable=False)
    currency = Column(String(3), nullable=False, default="PHP")

    total_assessed = Column(Numeric(12, 2), nullable=False)

    tuition_fee = Column(Numeric(12, 2), nullable=False, default=0)
    computer_lab_fee = Column(Numeric(12, 2), nullable=False, default=0)
    athletic_fee = Column(Numeric(12, 2), nullable=False, default=0)
    library_fee = Column(Numeric(12, 2), nullable=False, default=0)

    # Miscellaneous group, reported as a single total
    cultural_fee = Column(Numeric(12, 2), nullable=False, default=0)
    internet_fee = Column(Numeric(12, 2), nullable=False, default=0)
    medical_dental_fee = Column(Numeric(12, 2), nullable=False, default=0)
    registration_fee = Column(Numeric(12, 2), nullable=False, default=0)
    school_pub_fee = Column(Numeric(12, 2), nullable=False, default=0)
    id_validation_fee = Column(Numeric(12, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
