import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import date, datetime
from typing import Any

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from sqlalchemy import Column, Table, insert, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from clinic_records.config import settings
from clinic_records.database import create_engine_for, create_schema, drop_schema
from clinic_records.models import doctors, patients, rooms
from clinic_records.seed import load_seed_data

# Load environment variables from .env file
load_dotenv()

# Optional external test database; defaults to a SQLite file per test
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

# Safety check: tests drop every clinic table
if TEST_DATABASE_URL and TEST_DATABASE_URL == settings.database_url:
    pytest.exit(
        "TEST_DATABASE_URL is the same as DATABASE_URL; tests would drop its tables",
        returncode=1,
    )


@pytest_asyncio.fixture
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create an engine on a fresh, empty clinic schema."""
    url = TEST_DATABASE_URL or f"sqlite:///{tmp_path / 'clinic_test.db'}"
    engine = create_engine_for(url, poolclass=NullPool)

    await drop_schema(engine)
    await create_schema(engine)

    yield engine

    await drop_schema(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(db_session: AsyncSession) -> dict[str, int]:
    """Load the example rows."""
    return await load_seed_data(db_session)


@pytest.fixture
def lookup(db_session: AsyncSession) -> Callable[[Table, Column, Any], Awaitable[int]]:
    """Resolve a row id from a natural key."""

    async def _lookup(table: Table, column: Column, value: Any) -> int:
        result = await db_session.execute(select(table.c.id).where(column == value))
        return result.scalar_one()

    return _lookup


@pytest_asyncio.fixture
async def test_patient(db_session: AsyncSession) -> int:
    """Create a test patient."""
    result = await db_session.execute(
        insert(patients)
        .values(
            first_name="Test",
            last_name="Patient",
            date_of_birth=date(1988, 1, 15),
            gender="Female",
            email="patient@test.example",
        )
        .returning(patients.c.id)
    )
    await db_session.commit()
    return result.scalar_one()


@pytest_asyncio.fixture
async def test_doctor(db_session: AsyncSession) -> int:
    """Create a test doctor."""
    result = await db_session.execute(
        insert(doctors)
        .values(
            first_name="Test",
            last_name="Doctor",
            email="doctor@test.example",
            license_no="LIC-TEST-1",
        )
        .returning(doctors.c.id)
    )
    await db_session.commit()
    return result.scalar_one()


@pytest_asyncio.fixture
async def test_room(db_session: AsyncSession) -> int:
    """Create a test room."""
    result = await db_session.execute(
        insert(rooms).values(room_number="T1", floor="1").returning(rooms.c.id)
    )
    await db_session.commit()
    return result.scalar_one()


@pytest.fixture
def appointment_values(test_patient: int, test_doctor: int) -> dict[str, Any]:
    """Column values for a valid appointment."""
    return {
        "patient_id": test_patient,
        "doctor_id": test_doctor,
        "scheduled_start": datetime(2025, 10, 5, 9, 0),
        "scheduled_end": datetime(2025, 10, 5, 9, 30),
        "reason": "Checkup",
    }
