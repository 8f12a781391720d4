from decimal import Decimal
from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.main import app
from app.core.models import FeeAssessment
from app.db.session import Base, get_db


SEEDED_ENROLLMENT_ID = 1001


@pytest_asyncio.fixture()
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh SQLite file per test, so separate sessions see each other's commits."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False, future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Session for direct inspection and setup inside a test."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app; one session per request like get_db."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def fee_assessment(db_session: AsyncSession) -> FeeAssessment:
    """Enrollment 1001 assessed at 50000.00; itemized fees add up to the same total."""
    assessment = FeeAssessment(
        enrollment_id=SEEDED_ENROLLMENT_ID,
        student_id="2024-00001",
        term="1st Semester 2024-2025",
        currency="PHP",
        total_assessed=Decimal("50000.00"),
        tuition_fee=Decimal("40000.00"),
        computer_lab_fee=Decimal("3000.00"),
        athletic_fee=Decimal("2000.00"),
        library_fee=Decimal("2000.00"),
        cultural_fee=Decimal("500.00"),
        internet_fee=Decimal("500.00"),
        medical_dental_fee=Decimal("500.00"),
        registration_fee=Decimal("500.00"),
        school_pub_fee=Decimal("500.00"),
        id_validation_fee=Decimal("500.00"),
    )
    db_session.add(assessment)
    await db_session.commit()
    return assessment
