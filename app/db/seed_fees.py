"""
Seed script to populate fees_information with sample assessments for local development.

This script:
1. Creates missing tables
2. Inserts or updates one fee assessment per entry in SAMPLE_ASSESSMENTS
"""
import asyncio
from decimal import Decimal
from typing import Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.models import FeeAssessment
from app.core.models.fee_assessment import ITEMIZED_FEE_FIELDS
from app.db.session import AsyncSessionLocal, init_models


SAMPLE_ASSESSMENTS: List[Dict] = [
    {
        "enrollment_id": 1001,
        "student_id": "2024-00001",
        "term": "1st Semester 2024-2025",
        "tuition_fee": Decimal("42000.00"),
        "computer_lab_fee": Decimal("3000.00"),
        "athletic_fee": Decimal("1000.00"),
        "library_fee": Decimal("1500.00"),
        "cultural_fee": Decimal("500.00"),
        "internet_fee": Decimal("700.00"),
        "medical_dental_fee": Decimal("400.00"),
        "registration_fee": Decimal("500.00"),
        "school_pub_fee": Decimal("250.00"),
        "id_validation_fee": Decimal("150.00"),
    },
    {
        "enrollment_id": 1002,
        "student_id": "2024-00002",
        "term": "1st Semester 2024-2025",
        "tuition_fee": Decimal("38000.00"),
        "computer_lab_fee": Decimal("0.00"),
        "athletic_fee": Decimal("1000.00"),
        "library_fee": Decimal("1500.00"),
        "cultural_fee": Decimal("500.00"),
        "internet_fee": Decimal("700.00"),
        "medical_dental_fee": Decimal("400.00"),
        "registration_fee": Decimal("500.00"),
        "school_pub_fee": Decimal("250.00"),
        "id_validation_fee": Decimal("150.00"),
    },
]


async def seed_fees(db: AsyncSession) -> None:
    """Insert or update the sample assessments. total_assessed is the sum of the itemized fees."""
    created = 0
    updated = 0

    for entry in SAMPLE_ASSESSMENTS:
        total = sum((entry[f] for f in ITEMIZED_FEE_FIELDS), Decimal("0"))
        existing = await db.get(FeeAssessment, entry["enrollment_id"])

        if existing:
            for key, value in entry.items():
                setattr(existing, key, value)
            existing.total_assessed = total
            updated += 1
        else:
            db.add(FeeAssessment(currency=settings.payment_currency, total_assessed=total, **entry))
            created += 1

    await db.commit()

    print("=" * 60)
    print("Fee Assessment Seeding Summary")
    print("=" * 60)
    print(f"Assessments created: {created}")
    print(f"Assessments updated: {updated}")
    print("=" * 60)
    print("✅ Seeding completed successfully!")


async def main() -> None:
    """Main entry point for the seed script."""
    await init_models()
    async with AsyncSessionLocal() as db:
        try:
            await seed_fees(db)
        except Exception as e:
            print(f"❌ Error seeding fee assessments: {e}")
            await db.rollback()
            raise


if __name__ == "__main__":
    asyncio.run(main())
