"""Medical record schemas for validation."""

from datetime import datetime

from pydantic import BaseModel, Field


class MedicalRecordCreate(BaseModel):
    """Schema for creating a medical record."""

    patient_id: int
    appointment_id: int | None = None
    record_date: datetime | None = None
    notes: str | None = None
    diagnosis: str | None = Field(None, max_length=255)


class MedicalRecordResponse(MedicalRecordCreate):
    """Medical record response schema."""

    id: int

    model_config = {"from_attributes": True}
