"""Tests for the example data loader."""

import pytest
from sqlalchemy import func, select

from clinic_records.core.exceptions import ConflictException
from clinic_records.models import metadata
from clinic_records.schemas.doctors import DoctorCreate
from clinic_records.seed import is_seeded, load_seed_data
from clinic_records.services.appointment_service import AppointmentService
from clinic_records.services.catalog_service import SpecialtyService
from clinic_records.services.doctor_service import DoctorService


@pytest.mark.asyncio
async def test_seed_counts_match_tables(db_session, seeded):
    """Test every table holds the reported number of rows."""
    assert set(seeded) == set(metadata.tables)

    for name, expected in seeded.items():
        table = metadata.tables[name]
        result = await db_session.execute(select(func.count()).select_from(table))
        assert result.scalar() == expected, name


@pytest.mark.asyncio
async def test_seed_is_idempotent(db_session):
    """Test that loading twice does not duplicate rows."""
    assert await is_seeded(db_session) is False

    first = await load_seed_data(db_session)
    assert first["appointments"] == 2
    assert await is_seeded(db_session) is True

    assert await load_seed_data(db_session) == {}


@pytest.mark.asyncio
async def test_failed_seed_leaves_store_empty(db_session):
    """Test that a failure part way rolls back every seed row."""
    doctor_service = DoctorService(db_session)
    blocker = await doctor_service.create_doctor(
        DoctorCreate(
            first_name="Existing",
            last_name="Doctor",
            email="existing@clinic.example",
            license_no="LIC-1002",
        )
    )

    with pytest.raises(ConflictException):
        await load_seed_data(db_session)

    assert await is_seeded(db_session) is False
    assert await SpecialtyService(db_session).count() == 0
    assert await doctor_service.count() == 1

    await doctor_service.delete(blocker.id)
    counts = await load_seed_data(db_session)

    assert counts["appointments"] == 2
    assert await AppointmentService(db_session).count() == 2
