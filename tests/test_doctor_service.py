"""Tests for doctor, patient and catalog services."""

from datetime import date

import pytest

from clinic_records.core.exceptions import (
    ConflictException,
    NotFoundException,
    ReferenceViolationException,
)
from clinic_records.schemas.catalog import MedicationCreate, RoomCreate, SpecialtyCreate
from clinic_records.schemas.doctors import DoctorCreate
from clinic_records.schemas.patients import Gender, PatientCreate
from clinic_records.services.catalog_service import (
    MedicationService,
    RoomService,
    SpecialtyService,
)
from clinic_records.services.doctor_service import DoctorService
from clinic_records.services.patient_service import PatientService


@pytest.fixture
def sample_doctor_data() -> DoctorCreate:
    """Sample doctor data for testing."""
    return DoctorCreate(
        first_name="Grace",
        last_name="Njeri",
        email="grace.njeri@clinic.example",
        phone="+254700000009",
        license_no="LIC-2001",
        hired_date=date(2022, 1, 4),
    )


@pytest.mark.asyncio
async def test_create_doctor(db_session, sample_doctor_data):
    """Test creating a doctor."""
    doctor = await DoctorService(db_session).create_doctor(sample_doctor_data)

    assert doctor.id is not None
    assert doctor.license_no == "LIC-2001"
    assert doctor.active is True
    assert doctor.full_name == "Grace Njeri"


@pytest.mark.asyncio
async def test_create_doctor_duplicate_email(db_session, sample_doctor_data):
    """Test that a duplicate email surfaces as a conflict."""
    service = DoctorService(db_session)
    await service.create_doctor(sample_doctor_data)

    duplicate = sample_doctor_data.model_copy(update={"license_no": "LIC-2002"})
    with pytest.raises(ConflictException) as exc_info:
        await service.create_doctor(duplicate)

    assert exc_info.value.status_code == 409
    assert not isinstance(exc_info.value, ReferenceViolationException)
    # Session is usable after the failed write
    assert await service.count() == 1


@pytest.mark.asyncio
async def test_create_doctor_duplicate_license(db_session, sample_doctor_data):
    """Test that a duplicate license number surfaces as a conflict."""
    service = DoctorService(db_session)
    await service.create_doctor(sample_doctor_data)

    duplicate = sample_doctor_data.model_copy(update={"email": "other@clinic.example"})
    with pytest.raises(ConflictException):
        await service.create_doctor(duplicate)


@pytest.mark.asyncio
async def test_get_doctor_not_found(db_session):
    """Test getting a doctor that does not exist."""
    with pytest.raises(NotFoundException) as exc_info:
        await DoctorService(db_session).get(404)

    assert exc_info.value.message == "Doctor 404 not found"


@pytest.mark.asyncio
async def test_set_active_and_filter(db_session, seeded):
    """Test deactivating a doctor and listing active doctors."""
    service = DoctorService(db_session)
    doctor = await service.get_by_license("LIC-1001")

    updated = await service.set_active(doctor.id, False)
    assert updated.active is False

    active = await service.list_doctors(active_only=True)
    assert [d.license_no for d in active] == ["LIC-1002"]
    assert len(await service.list_doctors()) == 2


@pytest.mark.asyncio
async def test_doctor_specialties(db_session, seeded):
    """Test listing, assigning and removing specialties."""
    service = DoctorService(db_session)
    doctor = await service.get_by_license("LIC-1001")

    names = [s.name for s in await service.list_specialties(doctor.id)]
    assert names == ["General Practice", "Pediatrics"]

    cardiology = await SpecialtyService(db_session).get_by_name("Cardiology")
    await service.assign_specialty(doctor.id, cardiology.id)
    assert len(await service.list_specialties(doctor.id)) == 3

    with pytest.raises(ConflictException):
        await service.assign_specialty(doctor.id, cardiology.id)

    await service.remove_specialty(doctor.id, cardiology.id)
    assert len(await service.list_specialties(doctor.id)) == 2

    with pytest.raises(NotFoundException):
        await service.remove_specialty(doctor.id, cardiology.id)


@pytest.mark.asyncio
async def test_assign_unknown_specialty(db_session, test_doctor):
    """Test that linking to a missing specialty is a reference violation."""
    with pytest.raises(ReferenceViolationException):
        await DoctorService(db_session).assign_specialty(test_doctor, 999)


@pytest.mark.asyncio
async def test_delete_doctor_blocked_by_appointments(db_session, seeded):
    """Test that the service reports the restricted delete."""
    service = DoctorService(db_session)
    doctor = await service.get_by_license("LIC-1002")

    with pytest.raises(ReferenceViolationException) as exc_info:
        await service.delete(doctor.id)

    assert exc_info.value.status_code == 409
    assert (await service.get(doctor.id)).id == doctor.id


@pytest.mark.asyncio
async def test_delete_missing_doctor(db_session):
    """Test deleting a doctor that does not exist."""
    with pytest.raises(NotFoundException):
        await DoctorService(db_session).delete(12345)


@pytest.mark.asyncio
async def test_patient_create_search_and_dependents(db_session, seeded):
    """Test patient creation, search and dependent counts."""
    service = PatientService(db_session)
    created = await service.create_patient(
        PatientCreate(first_name="Peter", last_name="Kamau", gender=Gender.MALE)
    )
    assert created.gender == Gender.MALE
    assert created.created_at is not None

    found = await service.search_patients("kamau")
    assert [p.first_name for p in found] == ["Jane", "Peter"]

    john = (await service.search_patients("doe"))[0]
    assert await service.count_dependents(john.id) == {
        "appointments": 1,
        "medical_records": 1,
        "prescriptions": 1,
        "billing": 1,
    }

    await service.delete(john.id)
    assert await service.count_dependents(john.id) == {
        "appointments": 0,
        "medical_records": 0,
        "prescriptions": 0,
        "billing": 0,
    }


@pytest.mark.asyncio
async def test_patient_default_gender(db_session):
    """Test that a patient without gender is stored as Other."""
    patient = await PatientService(db_session).create_patient(
        PatientCreate(first_name="Sam", last_name="Otieno")
    )
    assert patient.gender == Gender.OTHER


@pytest.mark.asyncio
async def test_catalog_services(db_session):
    """Test create, list and uniqueness on the lookup tables."""
    specialties = SpecialtyService(db_session)
    await specialties.create(SpecialtyCreate(name="Dermatology"))
    with pytest.raises(ConflictException):
        await specialties.create(SpecialtyCreate(name="Dermatology"))

    medications = MedicationService(db_session)
    med = await medications.create(MedicationCreate(name="Cetirizine", formulation="Tablet"))
    assert (await medications.get_by_name("Cetirizine")).id == med.id

    room_service = RoomService(db_session)
    await room_service.create(RoomCreate(room_number="R201", floor="2"))
    await room_service.create(RoomCreate(room_number="R202", floor="2"))
    assert [r.room_number for r in await room_service.list_all()] == ["R201", "R202"]
    assert await room_service.get_by_number("R999") is None
