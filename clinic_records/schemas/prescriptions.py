"""Prescription schemas for validation."""

from datetime import datetime

from pydantic import BaseModel, Field


class PrescriptionItemCreate(BaseModel):
    """A medication line on a prescription."""

    medication_id: int
    dosage: str = Field(..., min_length=1, max_length=100)
    duration: str | None = Field(None, max_length=50)
    quantity: int = Field(default=1, ge=1)


class PrescriptionItemResponse(PrescriptionItemCreate):
    """Prescription item response schema."""

    prescription_id: int
    quantity: int | None = None

    model_config = {"from_attributes": True}


class PrescriptionCreate(BaseModel):
    """Schema for issuing a prescription together with its items."""

    patient_id: int
    doctor_id: int
    appointment_id: int | None = None
    issued_at: datetime | None = None
    notes: str | None = Field(None, max_length=500)
    items: list[PrescriptionItemCreate] = Field(default_factory=list)


class PrescriptionResponse(BaseModel):
    """Prescription response schema."""

    id: int
    patient_id: int
    doctor_id: int
    appointment_id: int | None = None
    issued_at: datetime | None = None
    notes: str | None = None
    items: list[PrescriptionItemResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}
