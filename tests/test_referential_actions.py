"""Tests for cascade, restrict and set-null delete behaviour on the seeded store."""

import pytest
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from clinic_records.models import (
    appointments,
    billing,
    doctor_specialties,
    doctors,
    medical_records,
    medications,
    patients,
    payments,
    prescription_items,
    prescriptions,
    rooms,
    specialties,
)

JOHN = "john.doe@example.com"


async def _count(db_session, table, *conditions) -> int:
    stmt = select(func.count()).select_from(table)
    if conditions:
        stmt = stmt.where(*conditions)
    result = await db_session.execute(stmt)
    return result.scalar_one()


async def _delete(db_session, table, row_id) -> None:
    await db_session.execute(delete(table).where(table.c.id == row_id))
    await db_session.commit()


@pytest.mark.asyncio
async def test_seed_appointments_respect_schedule(db_session, seeded):
    """Test that every appointment ends after it starts."""
    result = await db_session.execute(
        select(appointments.c.scheduled_start, appointments.c.scheduled_end)
    )
    rows = result.all()
    assert len(rows) == 2
    assert all(end > start for start, end in rows)


@pytest.mark.asyncio
async def test_delete_patient_cascades(db_session, seeded, lookup):
    """Test that deleting a patient removes everything that depends on them."""
    patient_id = await lookup(patients, patients.c.email, JOHN)
    assert await _count(db_session, appointments, appointments.c.patient_id == patient_id) == 1
    assert await _count(db_session, medical_records) == 1
    assert await _count(db_session, prescriptions) == 1
    assert await _count(db_session, billing) == 1

    await _delete(db_session, patients, patient_id)

    assert await _count(db_session, appointments, appointments.c.patient_id == patient_id) == 0
    assert await _count(db_session, medical_records) == 0
    assert await _count(db_session, prescriptions) == 0
    assert await _count(db_session, prescription_items) == 0
    assert await _count(db_session, billing) == 0
    assert await _count(db_session, payments) == 0
    # The other patient's appointment is untouched
    assert await _count(db_session, appointments) == 1


@pytest.mark.asyncio
async def test_delete_doctor_with_appointments_is_restricted(db_session, seeded, lookup):
    """Test that a doctor with appointments cannot be deleted."""
    doctor_id = await lookup(doctors, doctors.c.license_no, "LIC-1002")

    with pytest.raises(IntegrityError):
        await _delete(db_session, doctors, doctor_id)
    await db_session.rollback()

    assert await _count(db_session, doctors, doctors.c.id == doctor_id) == 1


@pytest.mark.asyncio
async def test_delete_doctor_with_prescription_is_restricted(db_session, seeded, lookup):
    """Test that prescriptions also block doctor deletion."""
    doctor_id = await lookup(doctors, doctors.c.license_no, "LIC-1001")
    await db_session.execute(delete(appointments).where(appointments.c.doctor_id == doctor_id))
    await db_session.commit()

    with pytest.raises(IntegrityError):
        await _delete(db_session, doctors, doctor_id)
    await db_session.rollback()


@pytest.mark.asyncio
async def test_delete_doctor_without_references_cascades_links(db_session, seeded, lookup):
    """Test that an unreferenced doctor can be deleted and loses its specialty links."""
    doctor_id = await lookup(doctors, doctors.c.license_no, "LIC-1002")
    await db_session.execute(delete(appointments).where(appointments.c.doctor_id == doctor_id))
    await db_session.commit()
    links = doctor_specialties.c.doctor_id == doctor_id
    assert await _count(db_session, doctor_specialties, links) == 2

    await _delete(db_session, doctors, doctor_id)

    assert await _count(db_session, doctor_specialties, links) == 0
    assert await _count(db_session, specialties) == 3


@pytest.mark.asyncio
async def test_delete_specialty_cascades_links(db_session, seeded, lookup):
    """Test that deleting a specialty removes its doctor links only."""
    specialty_id = await lookup(specialties, specialties.c.name, "General Practice")

    await _delete(db_session, specialties, specialty_id)

    assert await _count(db_session, doctor_specialties) == 2
    assert await _count(db_session, doctors) == 2


@pytest.mark.asyncio
async def test_delete_room_nulls_appointment_room(db_session, seeded, lookup):
    """Test that deleting a room keeps its appointments with no room."""
    room_id = await lookup(rooms, rooms.c.room_number, "R101")

    await _delete(db_session, rooms, room_id)

    result = await db_session.execute(
        select(appointments).where(appointments.c.reason == "Fever and cough")
    )
    appointment = result.mappings().one()
    assert appointment["room_id"] is None
    assert appointment["status"] == "Scheduled"


@pytest.mark.asyncio
async def test_delete_appointment_nulls_links(db_session, seeded):
    """Test that records, prescriptions and bills outlive their appointment."""
    result = await db_session.execute(
        select(appointments.c.id).where(appointments.c.reason == "Fever and cough")
    )
    appointment_id = result.scalar_one()

    await _delete(db_session, appointments, appointment_id)

    record = (await db_session.execute(select(medical_records))).mappings().one()
    prescription = (await db_session.execute(select(prescriptions))).mappings().one()
    bill = (await db_session.execute(select(billing))).mappings().one()

    assert record["appointment_id"] is None
    assert record["diagnosis"] == "Upper respiratory infection"
    assert prescription["appointment_id"] is None
    assert bill["appointment_id"] is None


@pytest.mark.asyncio
async def test_delete_referenced_medication_is_restricted(db_session, seeded, lookup):
    """Test that a medication on a prescription cannot be deleted."""
    medication_id = await lookup(medications, medications.c.name, "Amoxicillin")

    with pytest.raises(IntegrityError):
        await _delete(db_session, medications, medication_id)
    await db_session.rollback()

    assert await _count(db_session, medications) == 2


@pytest.mark.asyncio
async def test_delete_unreferenced_medication(db_session, seeded, lookup):
    """Test that an unused medication can be deleted."""
    medication_id = await lookup(medications, medications.c.name, "Paracetamol")

    await _delete(db_session, medications, medication_id)

    assert await _count(db_session, medications) == 1


@pytest.mark.asyncio
async def test_delete_prescription_cascades_items(db_session, seeded):
    """Test that prescription items go with their prescription."""
    prescription_id = (await db_session.execute(select(prescriptions.c.id))).scalar_one()

    await _delete(db_session, prescriptions, prescription_id)

    assert await _count(db_session, prescription_items) == 0
    assert await _count(db_session, medications) == 2


@pytest.mark.asyncio
async def test_delete_bill_cascades_payments(db_session, seeded):
    """Test that deleting a bill removes its payments."""
    bill_id = (await db_session.execute(select(billing.c.id))).scalar_one()
    assert await _count(db_session, payments, payments.c.bill_id == bill_id) == 1

    await _delete(db_session, billing, bill_id)

    assert await _count(db_session, payments) == 0
