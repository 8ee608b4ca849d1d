"""Database models."""

from clinic_records.models.appointments import appointments
from clinic_records.models.base import metadata
from clinic_records.models.billing import billing, payments
from clinic_records.models.doctors import doctor_specialties, doctors
from clinic_records.models.medical_records import medical_records
from clinic_records.models.patients import patients
from clinic_records.models.prescriptions import prescription_items, prescriptions
from clinic_records.models.rooms import rooms
from clinic_records.models.specialties import medications, specialties

__all__ = [
    "appointments",
    "billing",
    "doctor_specialties",
    "doctors",
    "medical_records",
    "medications",
    "metadata",
    "patients",
    "payments",
    "prescription_items",
    "prescriptions",
    "rooms",
    "specialties",
]
