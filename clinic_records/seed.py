"""Example rows for a fresh clinic database.

Rows reference each other by natural key (license number, patient email,
room number, names) so they load into any empty store regardless of the
surrogate ids it hands out.
"""

from datetime import date, datetime
from decimal import Decimal

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_records.models.specialties import specialties
from clinic_records.schemas.appointments import AppointmentCreate, AppointmentStatus
from clinic_records.schemas.billing import BillCreate, PaymentCreate, PaymentMethod
from clinic_records.schemas.catalog import MedicationCreate, RoomCreate, SpecialtyCreate
from clinic_records.schemas.doctors import DoctorCreate
from clinic_records.schemas.medical_records import MedicalRecordCreate
from clinic_records.schemas.patients import Gender, PatientCreate
from clinic_records.schemas.prescriptions import PrescriptionCreate, PrescriptionItemCreate
from clinic_records.services.appointment_service import AppointmentService
from clinic_records.services.billing_service import BillingService
from clinic_records.services.catalog_service import (
    MedicationService,
    RoomService,
    SpecialtyService,
)
from clinic_records.services.doctor_service import DoctorService
from clinic_records.services.medical_record_service import MedicalRecordService
from clinic_records.services.patient_service import PatientService
from clinic_records.services.prescription_service import PrescriptionService

logger = structlog.get_logger(__name__)

SEED_SPECIALTIES = [
    SpecialtyCreate(name="General Practice", description="General health and primary care"),
    SpecialtyCreate(name="Pediatrics", description="Child health"),
    SpecialtyCreate(name="Cardiology", description="Heart specialist"),
]

SEED_DOCTORS = [
    DoctorCreate(
        first_name="Alice",
        last_name="Mwangi",
        email="alice.mwangi@clinic.example",
        phone="+254700000001",
        license_no="LIC-1001",
        hired_date=date(2019, 3, 10),
    ),
    DoctorCreate(
        first_name="James",
        last_name="Otieno",
        email="james.otieno@clinic.example",
        phone="+254700000002",
        license_no="LIC-1002",
        hired_date=date(2021, 6, 15),
    ),
]

# (license_no, specialty name)
SEED_DOCTOR_SPECIALTIES = [
    ("LIC-1001", "General Practice"),
    ("LIC-1001", "Pediatrics"),
    ("LIC-1002", "General Practice"),
    ("LIC-1002", "Cardiology"),
]

SEED_PATIENTS = [
    PatientCreate(
        first_name="John",
        last_name="Doe",
        date_of_birth=date(1984, 7, 20),
        gender=Gender.MALE,
        email="john.doe@example.com",
        phone="+254711000111",
        address="Nairobi",
    ),
    PatientCreate(
        first_name="Jane",
        last_name="Kamau",
        date_of_birth=date(1990, 11, 2),
        gender=Gender.FEMALE,
        email="jane.kamau@example.com",
        phone="+254711000222",
        address="Nakuru",
    ),
]

SEED_ROOMS = [
    RoomCreate(room_number="R101", floor="1", notes="General consultation"),
    RoomCreate(room_number="R102", floor="1", notes="Pediatrics"),
]

SEED_MEDICATIONS = [
    MedicationCreate(name="Amoxicillin", manufacturer="PharmaCo", formulation="Capsule"),
    MedicationCreate(name="Paracetamol", manufacturer="MediLab", formulation="Tablet"),
]

# (patient email, license_no, room_number, start, end, status, reason)
SEED_APPOINTMENTS = [
    (
        "john.doe@example.com",
        "LIC-1001",
        "R101",
        datetime(2025, 10, 5, 9, 0),
        datetime(2025, 10, 5, 9, 20),
        AppointmentStatus.SCHEDULED,
        "Fever and cough",
    ),
    (
        "jane.kamau@example.com",
        "LIC-1002",
        "R102",
        datetime(2025, 10, 5, 10, 0),
        datetime(2025, 10, 5, 10, 30),
        AppointmentStatus.SCHEDULED,
        "Routine check",
    ),
]

SEED_MEDICAL_RECORD = {
    "notes": "High temperature. Throat redness.",
    "diagnosis": "Upper respiratory infection",
}

SEED_PRESCRIPTION_NOTES = "Take as directed"

SEED_PRESCRIPTION_ITEM = {
    "medication": "Amoxicillin",
    "dosage": "500mg three times a day",
    "duration": "5 days",
    "quantity": 15,
}

SEED_BILL_TOTAL = Decimal("1500.00")

SEED_PAYMENT = PaymentCreate(
    amount=Decimal("1500.00"),
    method=PaymentMethod.MOBILE_MONEY,
    transaction_reference="TXN-123456",
)


async def is_seeded(db: AsyncSession) -> bool:
    """Check whether the example rows have already been loaded."""
    result = await db.execute(select(func.count()).select_from(specialties))
    return (result.scalar() or 0) > 0


async def _insert_seed_rows(db: AsyncSession) -> None:
    """Insert the example rows in dependency order, without committing."""
    specialty_service = SpecialtyService(db, autocommit=False)
    specialty_ids = {}
    for specialty in SEED_SPECIALTIES:
        created = await specialty_service.create(specialty)
        specialty_ids[created.name] = created.id

    doctor_service = DoctorService(db, autocommit=False)
    doctor_ids = {}
    for doctor in SEED_DOCTORS:
        created = await doctor_service.create_doctor(doctor)
        doctor_ids[created.license_no] = created.id

    for license_no, specialty_name in SEED_DOCTOR_SPECIALTIES:
        await doctor_service.assign_specialty(doctor_ids[license_no], specialty_ids[specialty_name])

    patient_service = PatientService(db, autocommit=False)
    patient_ids = {}
    for patient in SEED_PATIENTS:
        created = await patient_service.create_patient(patient)
        patient_ids[created.email] = created.id

    room_service = RoomService(db, autocommit=False)
    room_ids = {}
    for room in SEED_ROOMS:
        created = await room_service.create(room)
        room_ids[created.room_number] = created.id

    medication_service = MedicationService(db, autocommit=False)
    medication_ids = {}
    for medication in SEED_MEDICATIONS:
        created = await medication_service.create(medication)
        medication_ids[created.name] = created.id

    appointment_service = AppointmentService(db, autocommit=False)
    appointment_ids = []
    for email, license_no, room_number, start, end, status, reason in SEED_APPOINTMENTS:
        created = await appointment_service.create_appointment(
            AppointmentCreate(
                patient_id=patient_ids[email],
                doctor_id=doctor_ids[license_no],
                room_id=room_ids[room_number],
                scheduled_start=start,
                scheduled_end=end,
                status=status,
                reason=reason,
            )
        )
        appointment_ids.append(created.id)

    # Follow-up for the first appointment
    first_patient_id = patient_ids[SEED_APPOINTMENTS[0][0]]
    first_doctor_id = doctor_ids[SEED_APPOINTMENTS[0][1]]
    first_appointment_id = appointment_ids[0]

    await MedicalRecordService(db, autocommit=False).create_record(
        MedicalRecordCreate(
            patient_id=first_patient_id,
            appointment_id=first_appointment_id,
            **SEED_MEDICAL_RECORD,
        )
    )

    item = dict(SEED_PRESCRIPTION_ITEM)
    medication_id = medication_ids[item.pop("medication")]
    await PrescriptionService(db, autocommit=False).create_prescription(
        PrescriptionCreate(
            patient_id=first_patient_id,
            doctor_id=first_doctor_id,
            appointment_id=first_appointment_id,
            notes=SEED_PRESCRIPTION_NOTES,
            items=[PrescriptionItemCreate(medication_id=medication_id, **item)],
        )
    )

    billing_service = BillingService(db, autocommit=False)
    bill = await billing_service.create_bill(
        BillCreate(
            patient_id=first_patient_id,
            appointment_id=first_appointment_id,
            total_amount=SEED_BILL_TOTAL,
        )
    )
    await billing_service.record_payment(bill.id, SEED_PAYMENT)


async def load_seed_data(db: AsyncSession) -> dict[str, int]:
    """
    Insert the example rows as a single transaction.

    The payment goes through :class:`BillingService` so the first bill ends
    up ``Paid`` with ``paid_amount`` equal to its total. A failure part way
    rolls back every row written so far.

    Args:
        db: Database session on an empty schema

    Returns:
        Number of rows written per table
    """
    if await is_seeded(db):
        logger.info("seed_skipped", reason="already_seeded")
        return {}

    try:
        await _insert_seed_rows(db)
        await db.commit()
    except Exception:
        await db.rollback()
        logger.error("seed_failed")
        raise

    counts = {
        "specialties": len(SEED_SPECIALTIES),
        "doctors": len(SEED_DOCTORS),
        "doctor_specialties": len(SEED_DOCTOR_SPECIALTIES),
        "patients": len(SEED_PATIENTS),
        "rooms": len(SEED_ROOMS),
        "medications": len(SEED_MEDICATIONS),
        "appointments": len(SEED_APPOINTMENTS),
        "medical_records": 1,
        "prescriptions": 1,
        "prescription_items": 1,
        "billing": 1,
        "payments": 1,
    }
    logger.info("seed_loaded", **counts)
    return counts
